from __future__ import annotations

import logging

from burrow.core.errors import OperationResult, wrap_error
from burrow.core.logging import get_logger, log_event
from burrow.core.resources import ResourceFactory, TransientResource, create_resource
from burrow.core.state import PreviewState, SessionStateStore
from burrow.domain.entries import FileEntry
from burrow.domain.preview import PreviewKind, classify, mime_type_for
from burrow.gateway.protocol import FilesystemGateway

logger = get_logger(__name__)


class PreviewManager:
    """Loads preview content and owns the binary resource of the open preview.

    At most one ``TransientResource`` is held at a time. It is released
    exactly once, when the preview closes or another entry replaces it.
    Content that arrives after its preview was replaced or closed is
    discarded before any resource is created for it.
    """

    def __init__(
        self,
        gateway: FilesystemGateway,
        store: SessionStateStore,
        *,
        resource_factory: ResourceFactory = create_resource,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._resource_factory = resource_factory
        self._resource: TransientResource | None = None
        self._token = 0

    @property
    def state(self) -> PreviewState | None:
        return self._store.state.preview

    @property
    def resource(self) -> TransientResource | None:
        return self._resource

    async def open(self, entry: FileEntry) -> OperationResult:
        self._token += 1
        token = self._token
        self._release_current()

        kind = classify(entry.name)
        if kind is PreviewKind.UNSUPPORTED:
            self._store.set_preview(PreviewState(entry=entry, kind=kind))
            return OperationResult.success()

        self._store.set_preview(PreviewState(entry=entry, kind=kind, loading=True))
        try:
            if kind.is_binary:
                payload: str | bytes = await self._gateway.read_binary(entry.path)
            else:
                payload = await self._gateway.read_text(entry.path)
        except Exception as exc:
            if token != self._token:
                return OperationResult.stale()
            return self._fail(entry, kind, exc)

        if token != self._token:
            log_event(logger, "preview.stale", path=entry.path)
            return OperationResult.stale()

        content: str | TransientResource
        if isinstance(payload, bytes):
            try:
                self._resource = self._resource_factory(
                    payload, entry.name, mime_type_for(entry.name)
                )
            except OSError as exc:
                return self._fail(
                    entry,
                    kind,
                    wrap_error(
                        exc,
                        code="preview_resource",
                        message=f"Could not stage a preview of {entry.name}",
                    ),
                )
            content = self._resource
        else:
            content = payload
        self._store.set_preview(
            PreviewState(entry=entry, kind=kind, content=content, loading=False)
        )
        log_event(logger, "preview.opened", path=entry.path, kind=kind.value)
        return OperationResult.success(content)

    def close(self) -> None:
        self._token += 1
        self._release_current()
        self._store.set_preview(None)

    def _fail(
        self, entry: FileEntry, kind: PreviewKind, exc: BaseException
    ) -> OperationResult:
        log_event(
            logger,
            "preview.failed",
            level=logging.WARNING,
            path=entry.path,
            error=str(exc),
        )
        self._store.set_preview(
            PreviewState(entry=entry, kind=kind, loading=False, error=str(exc))
        )
        return OperationResult.from_error(exc)

    def _release_current(self) -> None:
        resource, self._resource = self._resource, None
        if resource is not None:
            resource.release()
