from __future__ import annotations

from pathlib import Path
import shutil


class FileSystemController:
    """Encapsulates file-system mutations behind the local gateway."""

    def delete_path(self, target: Path) -> None:
        if not target.exists() and not target.is_symlink():
            raise FileNotFoundError(f"{target} does not exist")

        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()

    def rename_path(self, source: Path, new_name: str) -> Path:
        if not source.exists():
            raise FileNotFoundError(f"{source} does not exist")

        destination = source.with_name(new_name)
        if destination == source:
            return destination
        if destination.exists():
            raise FileExistsError(f"{destination} already exists")

        source.rename(destination)
        return destination

    def paste_path(self, source: Path, destination: Path) -> Path:
        """Copy ``source`` into ``destination``.

        A directory destination receives the source under its own name;
        anything else is treated as the exact target path.
        """
        if not source.exists():
            raise FileNotFoundError(f"{source} does not exist")

        target = destination / source.name if destination.is_dir() else destination
        if target == source:
            raise FileExistsError(f"{target} already exists")

        if source.is_dir():
            shutil.copytree(source, target)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
        return target
