"""Fixture generator error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ErrorCode(IntEnum):
    SUCCESS = 0x0000

    # Validation
    INVALID_FORMAT = 0x0100
    INVALID_TYPE = 0x0102
    INVALID_ADDRESS = 0x0106
    DEGENERATE_SEED = 0x0109

    # Authorization
    NOT_KEY_BACKED = 0x0200

    # State
    STORE_COMMIT_FAILED = 0x0402


@dataclass(frozen=True)
class FixtureError(Exception):
    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.name}({self.code:#06x}): {self.message}"


# Allow Python's Exception machinery to set __traceback__/__context__/__cause__
# while keeping dataclass fields frozen (Python 3.13 contextlib compat).
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__"))
_frozen_setattr = FixtureError.__setattr__


def _fixture_error_setattr(self: FixtureError, name: str, value: object) -> None:
    if name in _EXCEPTION_ATTRS:
        object.__setattr__(self, name, value)
    else:
        _frozen_setattr(self, name, value)


FixtureError.__setattr__ = _fixture_error_setattr  # type: ignore[method-assign]


class ContractViolation(AssertionError):
    """A caller broke a documented precondition (e.g. the seed bound).

    Not an error path: nothing in this package catches it.
    """


def err(code: ErrorCode, message: str) -> FixtureError:
    return FixtureError(code=code, message=message)
