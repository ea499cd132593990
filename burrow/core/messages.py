from textual.message import Message

from burrow.domain.entries import FileEntry


class NavigateRequest(Message):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__()


class HistoryRequest(Message):
    def __init__(self, delta: int) -> None:
        self.delta = delta
        super().__init__()


class PathInputChanged(Message):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__()


class PathKeyRequest(Message):
    def __init__(self, key: str, value: str) -> None:
        self.key = key
        self.value = value
        super().__init__()


class SuggestionChosen(Message):
    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__()


class SuggestionsDismissed(Message):
    pass


class SearchRequest(Message):
    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__()


class SortRequest(Message):
    def __init__(self, sort_by: str) -> None:
        self.sort_by = sort_by
        super().__init__()


class ActivateEntryRequest(Message):
    def __init__(self, entry: FileEntry) -> None:
        self.entry = entry
        super().__init__()


class ContextMenuRequest(Message):
    def __init__(self, entry: FileEntry) -> None:
        self.entry = entry
        super().__init__()
