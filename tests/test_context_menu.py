import asyncio

import pytest

from burrow.core.context_menu import ContextMenuController
from burrow.core.errors import NotFound, OperationResult, ResultStatus
from burrow.core.state import ListingResult

from tests.helpers import make_entry, settle


class RefreshCounter:
    def __init__(self) -> None:
        self.count = 0

    async def __call__(self) -> OperationResult:
        self.count += 1
        return OperationResult.success()


@pytest.fixture
def refresh():
    return RefreshCounter()


@pytest.fixture
def menu(gateway, store, refresh):
    return ContextMenuController(gateway, store, refresh_listing=refresh)


def show_directory(store, directory):
    store.set_listing(
        ListingResult(
            directory=directory,
            query="",
            sort_by="date",
            entries=(),
            total_files=0,
            total_folders=0,
        )
    )


def test_copy_sets_clipboard_and_closes_menu(gateway, menu):
    file = make_entry("report.pdf")
    menu.open_menu(file)

    result = menu.copy()

    assert result.ok
    assert menu.clipboard == file.path
    assert not menu.state.visible
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_clipboard_survives_repeated_pastes(gateway, store, menu, refresh):
    file = make_entry("report.pdf", directory="/src")
    first = make_entry("one", directory="/dst", is_dir=True)
    second = make_entry("two", directory="/dst", is_dir=True)
    menu.open_menu(file)
    menu.copy()

    menu.open_menu(first)
    assert (await menu.paste()).ok
    menu.open_menu(second)
    assert (await menu.paste()).ok

    assert gateway.calls_to("paste_entry") == [
        (file.path, first.path),
        (file.path, second.path),
    ]
    assert store.state.clipboard == file.path
    assert refresh.count == 2


@pytest.mark.asyncio
async def test_paste_on_file_targets_displayed_directory(gateway, store, menu):
    store.set_clipboard("/src/a.txt")
    store.set_directory("/typed/but/not/listed")
    show_directory(store, "/work")
    menu.open_menu(make_entry("b.txt", directory="/work"))

    await menu.paste()

    assert gateway.calls_to("paste_entry") == [("/src/a.txt", "/work")]


@pytest.mark.asyncio
async def test_paste_with_empty_clipboard_is_rejected(gateway, menu):
    menu.open_menu(make_entry("dir", is_dir=True))

    result = await menu.paste()

    assert result.status is ResultStatus.INVALID_INPUT
    assert result.error.code == "paste_nothing"
    assert result.error.severity == "information"
    assert not menu.state.visible
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_failed_action_closes_menu_without_refresh(gateway, menu, refresh):
    target = make_entry("gone.txt")
    gateway.fail("delete_entry", target.path, NotFound(code="not_found", message="x"))
    menu.open_menu(target)

    result = await menu.delete()

    assert result.status is ResultStatus.NOT_FOUND
    assert not menu.state.visible
    assert refresh.count == 0


@pytest.mark.asyncio
async def test_delete_refreshes_listing(gateway, menu, refresh):
    target = make_entry("old.log")
    menu.open_menu(target)

    result = await menu.delete()

    assert result.ok
    assert gateway.calls_to("delete_entry") == [(target.path,)]
    assert refresh.count == 1


@pytest.mark.asyncio
async def test_rename_passes_name_through_unchanged(gateway, menu, refresh):
    target = make_entry("draft.txt")
    menu.open_menu(target)

    result = await menu.rename(" final.txt ")

    assert result.ok
    assert gateway.calls_to("rename_entry") == [(target.path, " final.txt ")]
    assert refresh.count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("new_name", "code"),
    [
        ("", "rename_empty"),
        ("   ", "rename_empty"),
        (None, "rename_empty"),
        ("sub/name.txt", "rename_invalid"),
    ],
)
async def test_rename_rejects_bad_names(gateway, menu, refresh, new_name, code):
    menu.open_menu(make_entry("draft.txt"))

    result = await menu.rename(new_name)

    assert result.status is ResultStatus.INVALID_INPUT
    assert result.error.code == code
    assert not menu.state.visible
    assert gateway.calls == []
    assert refresh.count == 0


@pytest.mark.asyncio
async def test_actions_need_an_open_menu(gateway, menu):
    assert menu.copy().error.code == "menu_closed"
    assert (await menu.delete()).error.code == "menu_closed"
    assert gateway.calls == []


def test_background_click_closes_menu(menu):
    menu.open_menu(make_entry("a"))
    menu.close_menu()
    assert not menu.state.visible
    assert menu.state.target is None


@pytest.mark.asyncio
async def test_same_name_rename_reaches_gateway(gateway, menu, refresh):
    target = make_entry("draft.txt")
    menu.open_menu(target)

    result = await menu.rename("draft.txt")

    assert result.ok
    assert gateway.calls_to("rename_entry") == [(target.path, "draft.txt")]
    assert refresh.count == 1


@pytest.mark.asyncio
async def test_menu_opened_during_action_stays_open(gateway, store, menu):
    show_directory(store, "/data")
    first = make_entry("a.txt")
    second = make_entry("b.txt")
    menu.open_menu(first)
    menu.copy()
    menu.open_menu(first)
    gate = gateway.gate("paste_entry", first.path)

    paste = asyncio.create_task(menu.paste())
    await settle()
    menu.open_menu(second)
    gate.set()

    assert (await paste).ok
    assert menu.state.visible
    assert menu.state.target == second
    assert menu.copy().ok
    assert store.state.clipboard == second.path
