from .local import LocalFilesystemGateway
from .protocol import FilesystemGateway

__all__ = [
    "FilesystemGateway",
    "LocalFilesystemGateway",
]
