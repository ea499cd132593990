from __future__ import annotations

import asyncio
import functools
from pathlib import Path
from typing import Callable, TypeVar

from burrow.core.errors import GatewayError, NotFound, TransportFailure
from burrow.core.fs_controller import FileSystemController
from burrow.core.logging import get_logger, log_event
from burrow.domain.entries import ListingResponse
from burrow.services import file_listing

R = TypeVar("R")

logger = get_logger(__name__)


class LocalFilesystemGateway:
    """Serves gateway requests from the local filesystem.

    Blocking IO runs in a worker thread so the event loop stays responsive,
    and each call is bounded by ``timeout`` seconds.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        size_depth: int = 3,
        fs_controller: FileSystemController | None = None,
    ) -> None:
        self._timeout = timeout
        self._size_depth = size_depth
        self._fs = fs_controller or FileSystemController()

    async def home_directory(self) -> str:
        return await self._call("home_directory", lambda: str(Path.home()))

    async def list_directory(
        self, directory: str, search_query: str = ""
    ) -> ListingResponse:
        return await self._call(
            "list_directory",
            functools.partial(
                file_listing.collect_directory_listing,
                Path(directory).expanduser(),
                search_query or "",
            ),
        )

    async def delete_entry(self, path: str) -> None:
        await self._call("delete_entry", functools.partial(self._fs.delete_path, Path(path)))

    async def rename_entry(self, old_path: str, new_name: str) -> None:
        await self._call(
            "rename_entry",
            functools.partial(self._fs.rename_path, Path(old_path), new_name),
        )

    async def paste_entry(self, source_path: str, destination_path: str) -> None:
        await self._call(
            "paste_entry",
            functools.partial(
                self._fs.paste_path, Path(source_path), Path(destination_path)
            ),
        )

    async def autocomplete_path(self, partial_path: str) -> list[str]:
        return await self._call(
            "autocomplete_path",
            functools.partial(file_listing.autocomplete_path, partial_path),
        )

    async def read_text(self, path: str) -> str:
        return await self._call(
            "read_text", functools.partial(file_listing.read_text_content, Path(path))
        )

    async def read_binary(self, path: str) -> bytes:
        return await self._call(
            "read_binary",
            functools.partial(file_listing.read_binary_content, Path(path)),
        )

    async def directory_size(self, path: str) -> int:
        return await self._call(
            "directory_size",
            functools.partial(
                file_listing.compute_directory_size, Path(path), self._size_depth
            ),
        )

    async def _call(self, operation: str, func: Callable[[], R]) -> R:
        try:
            return await asyncio.wait_for(asyncio.to_thread(func), self._timeout)
        except GatewayError:
            raise
        except asyncio.TimeoutError as exc:
            log_event(logger, "gateway.timeout", operation=operation, timeout=self._timeout)
            raise TransportFailure(
                code="timeout",
                message=f"{operation} timed out",
                detail=f"no response after {self._timeout:g}s",
            ) from exc
        except FileNotFoundError as exc:
            raise NotFound(
                code="not_found",
                message=f"{operation} failed",
                detail=str(exc),
            ) from exc
        except OSError as exc:
            raise TransportFailure(
                code="io_error",
                message=f"{operation} failed",
                detail=str(exc),
            ) from exc
