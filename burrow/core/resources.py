from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from burrow.core.logging import get_logger, log_event
from burrow.domain.preview import file_extension

logger = get_logger(__name__)


class TransientResource:
    """A byte buffer exposed through a short-lived local file.

    The backing file exists from construction until ``release`` is called.
    Releasing twice is a no-op.
    """

    def __init__(self, data: bytes, *, name: str, mime_type: str) -> None:
        suffix = f".{file_extension(name)}" if file_extension(name) else ""
        fd, raw_path = tempfile.mkstemp(prefix="burrow-preview-", suffix=suffix)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except BaseException:
            Path(raw_path).unlink(missing_ok=True)
            raise
        self.name = name
        self.mime_type = mime_type
        self.size = len(data)
        self._path = Path(raw_path)
        self._released = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def uri(self) -> str:
        return self._path.as_uri()

    @property
    def released(self) -> bool:
        return self._released

    def read_bytes(self) -> bytes:
        if self._released:
            raise RuntimeError(f"Preview resource for {self.name} was released")
        return self._path.read_bytes()

    def release(self) -> bool:
        if self._released:
            return False
        self._released = True
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            log_event(logger, "preview.release_failed", path=str(self._path), error=str(exc))
        log_event(logger, "preview.released", name=self.name, uri=self.uri)
        return True

    def to_json(self) -> dict[str, object]:
        return {
            "name": self.name,
            "mime_type": self.mime_type,
            "size": self.size,
            "uri": self.uri,
            "released": self._released,
        }


ResourceFactory = Callable[[bytes, str, str], TransientResource]


def create_resource(data: bytes, name: str, mime_type: str) -> TransientResource:
    return TransientResource(data, name=name, mime_type=mime_type)


@contextmanager
def transient_resource(
    data: bytes,
    *,
    name: str,
    mime_type: str,
    factory: ResourceFactory = create_resource,
) -> Iterator[TransientResource]:
    resource = factory(data, name, mime_type)
    try:
        yield resource
    finally:
        resource.release()
