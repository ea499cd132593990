from __future__ import annotations

from enum import Enum
from pathlib import PurePath


class PreviewKind(Enum):
    TEXT = "text"
    IMAGE = "image"
    PDF = "pdf"
    UNSUPPORTED = "unsupported"

    @property
    def is_binary(self) -> bool:
        return self in {PreviewKind.IMAGE, PreviewKind.PDF}


TEXT_EXTENSIONS = frozenset(
    {"txt", "md", "log", "csv", "json", "yaml", "yml", "toml", "ini", "cfg", "xml"}
)
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif"})

MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "pdf": "application/pdf",
}

UNSUPPORTED_MESSAGE = "This file type cannot be previewed."


def file_extension(name: str) -> str:
    return PurePath(name).suffix.lstrip(".").lower()


def classify(name: str) -> PreviewKind:
    extension = file_extension(name)
    if extension in TEXT_EXTENSIONS:
        return PreviewKind.TEXT
    if extension in IMAGE_EXTENSIONS:
        return PreviewKind.IMAGE
    if extension == "pdf":
        return PreviewKind.PDF
    return PreviewKind.UNSUPPORTED


def mime_type_for(name: str) -> str:
    return MIME_TYPES.get(file_extension(name), "application/octet-stream")
