"""Tagged Result — Ok(result) | Err(error) returned by every data-layer call.

Invariants:
    - Exactly one of result / error exists on a value
    - Callers branch with isinstance (or is_ok) instead of catching exceptions
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    result: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


class ApiClientError(Exception):
    """Base for data-layer failures."""


class ApiCallError(ApiClientError):
    """The HTTP call failed: transport error (status_code None) or non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ApiContractError(ApiClientError):
    """The server answered with a shape the client does not understand."""


class SubmitPatientError(ApiClientError):
    """Patient registration failed; message is user-facing."""
