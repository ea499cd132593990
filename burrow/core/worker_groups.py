from __future__ import annotations


class WorkerGroup:
    AUTOCOMPLETE = "autocomplete"
    CONTEXT_ACTION = "context_action"
    DIRECTORY_LISTING = "directory_listing"
    DIRECTORY_SIZE = "directory_size"
    PREVIEW = "preview"

    ALL = (
        AUTOCOMPLETE,
        CONTEXT_ACTION,
        DIRECTORY_LISTING,
        DIRECTORY_SIZE,
        PREVIEW,
    )
