import pytest

from burrow.core.history import HistoryState, NavigationHistory


def test_empty_history_has_no_current_entry():
    history = NavigationHistory()
    assert history.state == HistoryState((), -1)
    assert history.state.current is None
    assert history.back() is None
    assert history.forward() is None


def test_record_appends_and_moves_cursor():
    history = NavigationHistory()
    history.record("/a")
    state = history.record("/b")
    assert state.entries == ("/a", "/b")
    assert state.index == 1
    assert state.current == "/b"
    assert state.can_go_back
    assert not state.can_go_forward


def test_back_then_record_truncates_forward_entries():
    history = NavigationHistory()
    for path in ("/a", "/b", "/c"):
        history.record(path)

    assert history.back() == "/b"
    state = history.record("/d")

    assert state.entries == ("/a", "/b", "/d")
    assert state.index == 2
    assert history.forward() is None


def test_back_and_forward_walk_the_stack():
    history = NavigationHistory()
    for path in ("/a", "/b", "/c"):
        history.record(path)

    assert history.back() == "/b"
    assert history.back() == "/a"
    assert history.back() is None
    assert history.state.index == 0
    assert history.forward() == "/b"
    assert history.forward() == "/c"
    assert history.forward() is None
    assert history.state.index == 2


def test_repeat_visits_are_recorded():
    history = NavigationHistory()
    history.record("/a")
    state = history.record("/a")
    assert state.entries == ("/a", "/a")


def test_limit_drops_oldest_entries():
    history = NavigationHistory(limit=3)
    for path in ("/1", "/2", "/3", "/4", "/5"):
        state = history.record(path)

    assert state.entries == ("/3", "/4", "/5")
    assert state.index == 2
    assert 0 <= state.index < len(state.entries)


def test_peek_looks_without_moving():
    history = NavigationHistory()
    for path in ("/a", "/b", "/c"):
        history.record(path)

    assert history.peek(-1) == (1, "/b")
    assert history.peek(-1, origin=1) == (0, "/a")
    assert history.peek(1) is None
    assert history.state.index == 2

    assert history.move_to(0).current == "/a"
    with pytest.raises(IndexError):
        history.move_to(3)
