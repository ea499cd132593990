from __future__ import annotations

import locale
from dataclasses import dataclass
from typing import Iterable, Literal, Sequence

SortKey = Literal["name", "size", "date"]

SORT_KEY_LABELS: dict[SortKey, str] = {
    "name": "Name",
    "size": "Size",
    "date": "Date",
}

DEFAULT_SORT: SortKey = "date"


@dataclass(frozen=True, slots=True)
class FileEntry:
    name: str
    path: str
    size: int = 0
    created: int = 0
    is_dir: bool = False

    def to_json(self) -> dict[str, object]:
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "created": self.created,
            "is_dir": self.is_dir,
        }


@dataclass(frozen=True, slots=True)
class ListingResponse:
    """What a gateway returns for one directory listing request."""

    entries: tuple[FileEntry, ...]
    total_files: int
    total_folders: int
    total_size: int | None = None


def normalize_sort_key(value: object) -> SortKey:
    text = str(value or "").strip().lower()
    if text in SORT_KEY_LABELS:
        return text  # type: ignore[return-value]
    return DEFAULT_SORT


def _name_key(entry: FileEntry) -> str:
    return locale.strxfrm(entry.name.casefold())


def sort_entries(entries: Iterable[FileEntry], sort_by: object) -> list[FileEntry]:
    """Order entries for display.

    Names sort ascending, sizes and creation times descending. The sort is
    stable, so ties keep the order they arrived in.
    """
    key = normalize_sort_key(sort_by)
    items = list(entries)
    if key == "name":
        return sorted(items, key=_name_key)
    if key == "size":
        return sorted(items, key=lambda entry: entry.size, reverse=True)
    return sorted(items, key=lambda entry: entry.created, reverse=True)


def unique_by_path(entries: Sequence[FileEntry]) -> tuple[list[FileEntry], int]:
    seen: set[str] = set()
    unique: list[FileEntry] = []
    for entry in entries:
        if entry.path in seen:
            continue
        seen.add(entry.path)
        unique.append(entry)
    return unique, len(entries) - len(unique)
