from __future__ import annotations

import asyncio
from typing import Any

from burrow.core.errors import NotFound
from burrow.core.resources import TransientResource
from burrow.domain.entries import FileEntry, ListingResponse


def make_entry(
    name: str,
    *,
    directory: str = "/data",
    size: int = 0,
    created: int = 0,
    is_dir: bool = False,
) -> FileEntry:
    return FileEntry(
        name=name,
        path=f"{directory.rstrip('/')}/{name}",
        size=size,
        created=created,
        is_dir=is_dir,
    )


def make_listing(*entries: FileEntry) -> ListingResponse:
    files = [entry for entry in entries if not entry.is_dir]
    return ListingResponse(
        entries=tuple(entries),
        total_files=len(files),
        total_folders=len(entries) - len(files),
        total_size=sum(entry.size for entry in files),
    )


class FakeGateway:
    """Scripted in-memory gateway.

    ``listings``, ``suggestions``, ``texts``, ``binaries`` and ``sizes`` hold
    the canned answers. ``fail(method, key, exc)`` makes matching calls raise
    and ``gate(method, key)`` holds a call until the returned event is set.
    """

    def __init__(self, home: str = "/home/user") -> None:
        self.home = home
        self.calls: list[tuple[Any, ...]] = []
        self.listings: dict[str, ListingResponse] = {}
        self.suggestions: dict[str, list[str]] = {}
        self.texts: dict[str, str] = {}
        self.binaries: dict[str, bytes] = {}
        self.sizes: dict[str, int] = {}
        self._failures: dict[tuple[str, str], BaseException] = {}
        self._gates: dict[tuple[str, str], asyncio.Event] = {}

    def fail(self, method: str, key: str, exc: BaseException) -> None:
        self._failures[(method, key)] = exc

    def gate(self, method: str, key: str) -> asyncio.Event:
        event = asyncio.Event()
        self._gates[(method, key)] = event
        return event

    def calls_to(self, method: str) -> list[tuple[Any, ...]]:
        return [call[1:] for call in self.calls if call[0] == method]

    async def _enter(self, method: str, key: str, *args: Any) -> None:
        self.calls.append((method, *args))
        gate = self._gates.pop((method, key), None)
        if gate is not None:
            await gate.wait()
        failure = self._failures.get((method, key))
        if failure is not None:
            raise failure

    async def home_directory(self) -> str:
        await self._enter("home_directory", "")
        return self.home

    async def list_directory(
        self, directory: str, search_query: str = ""
    ) -> ListingResponse:
        await self._enter("list_directory", directory, directory, search_query)
        if directory not in self.listings:
            raise NotFound(code="not_found", message=f"{directory} is missing")
        response = self.listings[directory]
        if not search_query:
            return response
        needle = search_query.casefold()
        return make_listing(
            *(entry for entry in response.entries if needle in entry.name.casefold())
        )

    async def delete_entry(self, path: str) -> None:
        await self._enter("delete_entry", path, path)

    async def rename_entry(self, old_path: str, new_name: str) -> None:
        await self._enter("rename_entry", old_path, old_path, new_name)

    async def paste_entry(self, source_path: str, destination_path: str) -> None:
        await self._enter("paste_entry", source_path, source_path, destination_path)

    async def autocomplete_path(self, partial_path: str) -> list[str]:
        await self._enter("autocomplete_path", partial_path, partial_path)
        return list(self.suggestions.get(partial_path, []))

    async def read_text(self, path: str) -> str:
        await self._enter("read_text", path, path)
        return self.texts.get(path, "")

    async def read_binary(self, path: str) -> bytes:
        await self._enter("read_binary", path, path)
        return self.binaries.get(path, b"")

    async def directory_size(self, path: str) -> int:
        await self._enter("directory_size", path, path)
        return self.sizes.get(path, 0)


class CountingResource(TransientResource):
    def __init__(self, data: bytes, *, name: str, mime_type: str) -> None:
        super().__init__(data, name=name, mime_type=mime_type)
        self.release_calls = 0

    def release(self) -> bool:
        self.release_calls += 1
        return super().release()


class ResourceRecorder:
    def __init__(self) -> None:
        self.created: list[CountingResource] = []

    def __call__(self, data: bytes, name: str, mime_type: str) -> CountingResource:
        resource = CountingResource(data, name=name, mime_type=mime_type)
        self.created.append(resource)
        return resource


async def settle() -> None:
    """Let freshly created tasks run up to their first suspension point."""
    for _ in range(3):
        await asyncio.sleep(0)
