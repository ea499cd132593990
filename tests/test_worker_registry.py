from types import SimpleNamespace

from textual.worker import WorkerState

from burrow.core.worker_groups import WorkerGroup
from burrow.core.worker_registry import WorkerRouter, worker_handler


class Target:
    def __init__(self) -> None:
        self.seen: list[str] = []

    @worker_handler(WorkerGroup.ALL, states=(WorkerState.ERROR,))
    def on_failure(self, event) -> bool:
        self.seen.append(f"failure:{event.worker.name}")
        return True

    @worker_handler(WorkerGroup.PREVIEW)
    def on_preview(self, event) -> bool:
        self.seen.append(f"preview:{event.worker.name}")
        return False

    def not_a_handler(self, event) -> bool:
        raise AssertionError("should not be routed")


def _event(group, state=WorkerState.SUCCESS, name="job"):
    return SimpleNamespace(worker=SimpleNamespace(group=group, name=name), state=state)


def test_state_filter_limits_delivery():
    target = Target()
    router = WorkerRouter()
    router.bind(target)

    assert not router.dispatch(_event(WorkerGroup.PREVIEW, name="open"))
    assert not router.dispatch(_event(WorkerGroup.DIRECTORY_LISTING, name="list"))
    assert router.dispatch(
        _event(WorkerGroup.DIRECTORY_LISTING, WorkerState.ERROR, name="broken")
    )

    assert target.seen == ["preview:open", "failure:broken"]


def test_first_handler_returning_true_stops_delivery():
    target = Target()
    router = WorkerRouter()
    router.bind(target)

    assert router.dispatch(_event(WorkerGroup.PREVIEW, WorkerState.ERROR, name="x"))
    assert target.seen == ["failure:x"]


def test_unknown_group_is_not_handled():
    router = WorkerRouter()
    router.bind(Target())
    assert not router.dispatch(_event("unrelated", WorkerState.ERROR))
    assert not router.dispatch(_event(None, WorkerState.ERROR))
