from .context_menu import ContextMenuScreen
from .dialogs import DeleteDialog, RenameDialog
from .file_list import FileList
from .path_bar import PathBar
from .preview import PreviewScreen
from .toolbar import ListingToolbar, StatsBar

__all__ = [
    "ContextMenuScreen",
    "DeleteDialog",
    "FileList",
    "ListingToolbar",
    "PathBar",
    "PreviewScreen",
    "RenameDialog",
    "StatsBar",
]
