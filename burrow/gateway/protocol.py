from __future__ import annotations

from typing import Protocol

from burrow.domain.entries import ListingResponse


class FilesystemGateway(Protocol):
    """Asynchronous boundary to the filesystem backend.

    Every method may raise ``TransportFailure`` or ``NotFound``.
    """

    async def home_directory(self) -> str: ...

    async def list_directory(
        self, directory: str, search_query: str = ""
    ) -> ListingResponse: ...

    async def delete_entry(self, path: str) -> None: ...

    async def rename_entry(self, old_path: str, new_name: str) -> None: ...

    async def paste_entry(self, source_path: str, destination_path: str) -> None: ...

    async def autocomplete_path(self, partial_path: str) -> list[str]: ...

    async def read_text(self, path: str) -> str: ...

    async def read_binary(self, path: str) -> bytes: ...

    async def directory_size(self, path: str) -> int: ...
