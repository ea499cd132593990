from __future__ import annotations

import inspect
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypeVar

from textual.worker import WorkerState


class WorkerEvent(Protocol):
    @property
    def worker(self) -> Any: ...

    @property
    def state(self) -> WorkerState: ...


WorkerHandler = Callable[[WorkerEvent], bool]
F = TypeVar("F", bound=Callable[..., Any])

_ROUTE_ATTR = "_burrow_worker_route"


@dataclass(frozen=True, slots=True)
class WorkerRoute:
    groups: tuple[str, ...]
    states: frozenset[WorkerState] | None = None

    def accepts(self, state: WorkerState) -> bool:
        return self.states is None or state in self.states


def worker_handler(
    groups: str | Iterable[str],
    *,
    states: Iterable[WorkerState] | None = None,
) -> Callable[[F], F]:
    """Mark a method as the handler for worker state changes in ``groups``.

    ``states`` narrows delivery to those worker states; by default every
    transition is delivered.
    """
    route = WorkerRoute(
        groups=(groups,) if isinstance(groups, str) else tuple(groups),
        states=frozenset(states) if states is not None else None,
    )

    def decorator(fn: F) -> F:
        setattr(fn, _ROUTE_ATTR, route)
        return fn

    return decorator


class WorkerRouter:
    """Delivers ``Worker.StateChanged`` events to the handlers bound for their group.

    Handlers run in binding order and the first one returning ``True`` stops
    delivery.
    """

    def __init__(self) -> None:
        self._routes: dict[str, list[tuple[WorkerRoute, WorkerHandler]]] = {}

    def register(self, route: WorkerRoute, handler: WorkerHandler) -> None:
        for group in route.groups:
            self._routes.setdefault(group, []).append((route, handler))

    def bind(self, target: object) -> None:
        for name, member in inspect.getmembers(type(target), inspect.isfunction):
            route = getattr(member, _ROUTE_ATTR, None)
            if isinstance(route, WorkerRoute):
                self.register(route, getattr(target, name))

    def dispatch(self, event: WorkerEvent) -> bool:
        group = getattr(event.worker, "group", None)
        if not isinstance(group, str):
            return False
        for route, handler in self._routes.get(group, []):
            if route.accepts(event.state) and handler(event):
                return True
        return False
