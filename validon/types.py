"""
Type definitions for validon.

Provides the Result type (Ok/Err), the Issue record carried by failures,
the UNDEFINED absence marker and shared type aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, Literal, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class _Undefined(Enum):
    """
    Sentinel for "no value provided".

    Distinct from None, which is an explicit null. Falsy so that
    `value or fallback` reads naturally.
    """

    UNDEFINED = "UNDEFINED"

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined.UNDEFINED
Undefined = Literal[_Undefined.UNDEFINED]


class IssueCode(str, Enum):
    """Stable error kinds reported by validators."""

    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    NOT_INTEGER = "not_integer"
    NOT_FINITE = "not_finite"
    NOT_SAFE_INTEGER = "not_safe_integer"
    NOT_MULTIPLE_OF = "not_multiple_of"
    INVALID_STRING = "invalid_string"
    INVALID_DATE = "invalid_date"
    INVALID_LITERAL = "invalid_literal"
    INVALID_LENGTH = "invalid_length"
    INVALID_UNION = "invalid_union"
    INVALID_DISCRIMINATOR = "invalid_discriminator"
    CUSTOM = "custom"


# Type aliases
Path = tuple[str | int, ...]


def format_path(path: Path) -> str:
    """Render a path as `a.b[0].c`."""
    out = ""
    for part in path:
        if isinstance(part, str):
            out = f"{out}.{part}" if out else part
        elif isinstance(part, int) and not isinstance(part, bool):
            out += f"[{part}]"
        else:
            out += f"[{part!r}]"
    return out


@dataclass(frozen=True, slots=True)
class Issue:
    """A single validation failure at a location in the input."""

    path: Path
    code: IssueCode
    message: str
    detail: Any = None

    def with_prefix(self, *prefix: str | int) -> Issue:
        return Issue(
            path=(*prefix, *self.path),
            code=self.code,
            message=self.message,
            detail=self.detail,
        )

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{format_path(self.path)}: {self.message}"


Issues = list[Issue]


def format_issues(issues: Issues) -> str:
    """Render issues one per line, in reporting order."""
    return "\n".join(f"- {issue} ({issue.code.value})" for issue in issues)


class ValidationError(ValueError):
    """Raised by `Err.unwrap()`; carries the failing issues."""

    def __init__(self, issues: Issues):
        self.issues = issues
        super().__init__(format_issues(issues))


class SchemaError(TypeError):
    """A schema was assembled incorrectly. Raised at construction time."""


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T
    ok: ClassVar[bool] = True

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E
    ok: ClassVar[bool] = False

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValidationError(self.error)  # type: ignore[arg-type]


Result = Ok[T] | Err[Issues]


def fail(
    code: IssueCode, message: str, path: Path = (), detail: Any = None
) -> Err[Issues]:
    """Build a single-issue failure."""
    return Err([Issue(path=path, code=code, message=message, detail=detail)])


def prefixed(result: Err[Issues], *prefix: str | int) -> Err[Issues]:
    """Re-root every issue of a child failure under `prefix`."""
    return Err([issue.with_prefix(*prefix) for issue in result.error])
