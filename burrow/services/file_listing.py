from __future__ import annotations

import os
from pathlib import Path

from burrow.domain.entries import FileEntry, ListingResponse


def collect_directory_listing(directory: Path, search_query: str = "") -> ListingResponse:
    """Scan one directory level, skipping hidden entries.

    ``search_query`` keeps only names containing it, case-insensitively.
    Entries whose metadata cannot be read are skipped.
    """
    if not directory.exists():
        raise FileNotFoundError(f"Directory does not exist: {directory}")

    needle = search_query.casefold()
    entries: list[FileEntry] = []
    total_files = 0
    total_folders = 0
    total_size = 0

    with os.scandir(directory) as scan:
        for item in scan:
            if not is_entry_visible(item.name):
                continue
            if needle and needle not in item.name.casefold():
                continue
            entry = _build_entry(item)
            if entry is None:
                continue
            entries.append(entry)
            if entry.is_dir:
                total_folders += 1
            else:
                total_files += 1
                total_size += entry.size

    return ListingResponse(
        entries=tuple(entries),
        total_files=total_files,
        total_folders=total_folders,
        total_size=total_size,
    )


def is_entry_visible(name: str) -> bool:
    return not name.startswith(".")


def _build_entry(item: os.DirEntry[str]) -> FileEntry | None:
    try:
        stat_result = item.stat()
        is_dir = item.is_dir()
    except OSError:
        return None
    return FileEntry(
        name=item.name,
        path=str(Path(item.path).absolute()),
        size=int(stat_result.st_size),
        created=_created_seconds(stat_result),
        is_dir=is_dir,
    )


def _created_seconds(stat_result: os.stat_result) -> int:
    birth = getattr(stat_result, "st_birthtime", None)
    if birth is None:
        birth = stat_result.st_ctime
    try:
        return max(0, int(birth))
    except (TypeError, ValueError, OverflowError):
        return 0


def compute_directory_size(path: Path, depth: int = 3) -> int:
    """Sum file sizes below ``path``, descending at most ``depth`` levels."""
    if not path.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")
    if path.is_file():
        return path.stat().st_size
    if depth <= 0:
        return 0

    total = 0
    with os.scandir(path) as scan:
        for item in scan:
            try:
                if item.is_dir(follow_symlinks=False):
                    total += compute_directory_size(Path(item.path), depth - 1)
                else:
                    total += item.stat(follow_symlinks=False).st_size
            except FileNotFoundError:
                continue
    return total


def autocomplete_path(partial_path: str, *, limit: int | None = None) -> list[str]:
    """Return siblings of ``partial_path`` whose names start with its last part."""
    path = Path(partial_path).expanduser()
    parent = path.parent
    prefix = path.name
    try:
        with os.scandir(parent) as scan:
            names = [item.name for item in scan if item.name.startswith(prefix)]
    except OSError:
        return []

    names.sort(key=str.casefold)
    results = [str(parent / name) for name in names]
    if limit is not None:
        results = results[:limit]
    return results


def read_text_content(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def read_binary_content(path: Path) -> bytes:
    return path.read_bytes()
