from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

Severity = Literal["error", "warning", "information"]

DEFAULT_SEVERITY_BY_CODE: dict[str, Severity] = {
    "paste_nothing": "information",
    "rename_empty": "information",
    "menu_closed": "information",
    "no_listing": "information",
    "rename_invalid": "warning",
}


@dataclass
class BurrowError(Exception):
    code: str
    message: str
    detail: str | None = None
    severity: Severity = "error"

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


@dataclass
class GatewayError(BurrowError):
    """Raised by a filesystem gateway when a request cannot be served."""


@dataclass
class TransportFailure(GatewayError):
    """The gateway rejected the call, timed out, or hit an IO error."""


@dataclass
class NotFound(GatewayError):
    """The target path vanished between listing and action."""


def format_error(error: BaseException) -> tuple[str, Severity]:
    if isinstance(error, BurrowError):
        prefix = f"[{error.code}] " if error.code else ""
        severity = DEFAULT_SEVERITY_BY_CODE.get(error.code, error.severity)
        return f"{prefix}{error}", severity
    return f"{error}", "error"


def wrap_error(
    error: BaseException,
    *,
    code: str,
    message: str,
    severity: Severity = "error",
) -> BurrowError:
    if isinstance(error, BurrowError):
        return error
    detail = str(error)
    return BurrowError(code=code, message=message, detail=detail, severity=severity)


class ResultStatus(Enum):
    SUCCESS = "success"
    TRANSPORT_FAILURE = "transport_failure"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    STALE = "stale"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one orchestrator operation, handed back to the caller."""

    status: ResultStatus
    error: BurrowError | None = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @property
    def failed(self) -> bool:
        return self.status in {ResultStatus.TRANSPORT_FAILURE, ResultStatus.NOT_FOUND}

    @classmethod
    def success(cls, value: Any = None) -> OperationResult:
        return cls(ResultStatus.SUCCESS, value=value)

    @classmethod
    def from_error(cls, error: BaseException) -> OperationResult:
        if isinstance(error, NotFound):
            return cls(ResultStatus.NOT_FOUND, error=error)
        if isinstance(error, GatewayError):
            return cls(ResultStatus.TRANSPORT_FAILURE, error=error)
        wrapped = wrap_error(error, code="transport", message="Request failed")
        return cls(ResultStatus.TRANSPORT_FAILURE, error=wrapped)

    @classmethod
    def invalid(cls, code: str, message: str) -> OperationResult:
        error = BurrowError(
            code=code,
            message=message,
            severity=DEFAULT_SEVERITY_BY_CODE.get(code, "warning"),
        )
        return cls(ResultStatus.INVALID_INPUT, error=error)

    @classmethod
    def stale(cls) -> OperationResult:
        return cls(ResultStatus.STALE)
