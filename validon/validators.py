"""
Primitive leaf validators for validon.

Each leaf checks the runtime kind of its input, then applies its
configured refinements in a fixed order, stopping at the first failure.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from datetime import date as date_type
from datetime import datetime, time
from typing import Any, Callable, Generic, TypeVar
from urllib.parse import urlparse

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .core import Schema, invalid_type
from .types import UNDEFINED, Err, IssueCode, Issues, Ok, fail

L = TypeVar("L")

MAX_SAFE_INTEGER = 2**53 - 1

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

_DATETIME_ADAPTER = TypeAdapter(datetime)


def is_number(value: Any) -> bool:
    """int or float, but not bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without cross-kind coercion: 1 == 1.0, but 1 != True != "1"."""
    if a is b:
        return True
    if is_number(a) and is_number(b):
        return a == b
    return type(a) is type(b) and a == b


@dataclass(frozen=True, slots=True)
class BooleanSchema(Schema[bool, bool]):
    def parse(self, value: Any = UNDEFINED) -> Ok[bool] | Err[Issues]:
        if not isinstance(value, bool):
            return invalid_type("boolean", value)
        return Ok(value)


@dataclass(frozen=True, slots=True)
class StringFormat:
    """A named format check applied after length bounds."""

    name: str
    test: Callable[[str], bool]
    message: str


def _is_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


@dataclass(frozen=True, slots=True)
class StringSchema(Schema[str, str]):
    min_length: int | None = None
    max_length: int | None = None
    exact_length: int | None = None
    formats: tuple[StringFormat, ...] = ()

    def parse(self, value: Any = UNDEFINED) -> Ok[str] | Err[Issues]:
        if not isinstance(value, str):
            return invalid_type("string", value)

        n = len(value)
        if self.min_length is not None and n < self.min_length:
            return fail(
                IssueCode.TOO_SMALL,
                f"String must contain at least {self.min_length} character(s)",
            )
        if self.max_length is not None and n > self.max_length:
            return fail(
                IssueCode.TOO_BIG,
                f"String must contain at most {self.max_length} character(s)",
            )
        if self.exact_length is not None and n != self.exact_length:
            code = IssueCode.TOO_SMALL if n < self.exact_length else IssueCode.TOO_BIG
            return fail(
                code, f"String must contain exactly {self.exact_length} character(s)"
            )

        for fmt in self.formats:
            if not fmt.test(value):
                return fail(IssueCode.INVALID_STRING, fmt.message, detail=fmt.name)

        return Ok(value)

    def min(self, n: int) -> StringSchema:
        return replace(self, min_length=n)

    def max(self, n: int) -> StringSchema:
        return replace(self, max_length=n)

    def length(self, n: int) -> StringSchema:
        return replace(self, exact_length=n)

    def nonempty(self) -> StringSchema:
        return self.min(1)

    def _with_format(self, fmt: StringFormat) -> StringSchema:
        return replace(self, formats=(*self.formats, fmt))

    def regex(self, pattern: str | re.Pattern[str], message: str | None = None):
        compiled = re.compile(pattern)
        return self._with_format(
            StringFormat(
                name="regex",
                test=lambda s: compiled.search(s) is not None,
                message=message or f"String must match pattern: {compiled.pattern}",
            )
        )

    def email(self) -> StringSchema:
        return self._with_format(
            StringFormat(
                name="email",
                test=lambda s: _EMAIL_RE.match(s) is not None,
                message="Invalid email",
            )
        )

    def url(self) -> StringSchema:
        return self._with_format(
            StringFormat(name="url", test=_is_url, message="Invalid url")
        )

    def uuid(self) -> StringSchema:
        return self._with_format(
            StringFormat(
                name="uuid",
                test=lambda s: _UUID_RE.match(s) is not None,
                message="Invalid uuid",
            )
        )

    def startswith(self, prefix: str) -> StringSchema:
        return self._with_format(
            StringFormat(
                name="startswith",
                test=lambda s: s.startswith(prefix),
                message=f'String must start with "{prefix}"',
            )
        )

    def endswith(self, suffix: str) -> StringSchema:
        return self._with_format(
            StringFormat(
                name="endswith",
                test=lambda s: s.endswith(suffix),
                message=f'String must end with "{suffix}"',
            )
        )


_SIGN_CHECKS: dict[str, tuple[Callable[[float], bool], IssueCode, str]] = {
    "positive": (lambda v: v > 0, IssueCode.TOO_SMALL, "greater than 0"),
    "negative": (lambda v: v < 0, IssueCode.TOO_BIG, "less than 0"),
    "nonpositive": (lambda v: v <= 0, IssueCode.TOO_BIG, "less than or equal to 0"),
    "nonnegative": (
        lambda v: v >= 0,
        IssueCode.TOO_SMALL,
        "greater than or equal to 0",
    ),
}


def _is_integral(value: int | float) -> bool:
    return isinstance(value, int) or value.is_integer()


def _is_multiple(value: int | float, step: int | float) -> bool:
    if isinstance(value, int) and isinstance(step, int):
        return value % step == 0
    quotient = value / step
    return math.isfinite(quotient) and math.isclose(
        round(quotient) * step, value, rel_tol=1e-9, abs_tol=1e-12
    )


@dataclass(frozen=True, slots=True)
class NumberSchema(Schema[int | float, int | float]):
    """
    Validator for int/float values (bool is rejected).

    Checks run in a fixed order: bounds (min, gt, max, lt), then integer,
    finite, safe-integer, multiple-of and finally sign.
    """

    minimum: int | float | None = None
    exclusive_minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_maximum: int | float | None = None
    require_int: bool = False
    require_finite: bool = False
    require_safe: bool = False
    step: int | float | None = None
    sign: str | None = None

    def parse(self, value: Any = UNDEFINED) -> Ok[int | float] | Err[Issues]:
        if not is_number(value):
            return invalid_type("number", value)

        if self.minimum is not None and value < self.minimum:
            return fail(
                IssueCode.TOO_SMALL,
                f"Number must be greater than or equal to {self.minimum}",
            )
        if self.exclusive_minimum is not None and value <= self.exclusive_minimum:
            return fail(
                IssueCode.TOO_SMALL,
                f"Number must be greater than {self.exclusive_minimum}",
            )
        if self.maximum is not None and value > self.maximum:
            return fail(
                IssueCode.TOO_BIG,
                f"Number must be less than or equal to {self.maximum}",
            )
        if self.exclusive_maximum is not None and value >= self.exclusive_maximum:
            return fail(
                IssueCode.TOO_BIG,
                f"Number must be less than {self.exclusive_maximum}",
            )
        if self.require_int and not _is_integral(value):
            return fail(
                IssueCode.NOT_INTEGER,
                f"Expected integer, received {type(value).__name__}",
            )
        if self.require_finite and not math.isfinite(value):
            return fail(IssueCode.NOT_FINITE, "Number must be finite")
        if self.require_safe and not (
            _is_integral(value) and abs(value) <= MAX_SAFE_INTEGER
        ):
            return fail(IssueCode.NOT_SAFE_INTEGER, "Number must be a safe integer")
        if self.step is not None and not _is_multiple(value, self.step):
            return fail(
                IssueCode.NOT_MULTIPLE_OF, f"Number must be a multiple of {self.step}"
            )
        if self.sign is not None:
            check, code, bound = _SIGN_CHECKS[self.sign]
            if not check(value):
                return fail(code, f"Number must be {bound}")

        return Ok(value)

    def min(self, n: int | float) -> NumberSchema:
        return replace(self, minimum=n)

    def gte(self, n: int | float) -> NumberSchema:
        return self.min(n)

    def gt(self, n: int | float) -> NumberSchema:
        return replace(self, exclusive_minimum=n)

    def max(self, n: int | float) -> NumberSchema:
        return replace(self, maximum=n)

    def lte(self, n: int | float) -> NumberSchema:
        return self.max(n)

    def lt(self, n: int | float) -> NumberSchema:
        return replace(self, exclusive_maximum=n)

    def int(self) -> NumberSchema:
        return replace(self, require_int=True)

    def finite(self) -> NumberSchema:
        return replace(self, require_finite=True)

    def safe(self) -> NumberSchema:
        return replace(self, require_safe=True)

    def multiple_of(self, n: int | float) -> NumberSchema:
        if n == 0:
            raise ValueError("multiple_of() requires a non-zero step")
        return replace(self, step=n)

    def positive(self) -> NumberSchema:
        return replace(self, sign="positive")

    def negative(self) -> NumberSchema:
        return replace(self, sign="negative")

    def nonpositive(self) -> NumberSchema:
        return replace(self, sign="nonpositive")

    def nonnegative(self) -> NumberSchema:
        return replace(self, sign="nonnegative")


def _is_aware(value: datetime) -> bool:
    return value.utcoffset() is not None


def _coerce_datetime(value: Any) -> datetime | None:
    """Date-construction step; None when the input cannot be coerced."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        return _DATETIME_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return None


@dataclass(frozen=True, slots=True)
class DateSchema(Schema[datetime | date_type | str | int | float, datetime]):
    """
    Validator producing a `datetime`.

    Accepts datetime (unchanged), date (at midnight), ISO-8601 strings and
    POSIX timestamps. An input whose timezone awareness differs from a
    configured bound fails with `invalid_date`.
    """

    minimum: datetime | None = None
    maximum: datetime | None = None

    def parse(self, value: Any = UNDEFINED) -> Ok[datetime] | Err[Issues]:
        if isinstance(value, datetime):
            out = value
        elif isinstance(value, date_type):
            out = datetime.combine(value, time.min)
        elif isinstance(value, str) or is_number(value):
            coerced = _coerce_datetime(value)
            if coerced is None:
                return fail(IssueCode.INVALID_DATE, "Invalid date format")
            out = coerced
        else:
            return invalid_type("date", value)

        for bound in (self.minimum, self.maximum):
            if bound is not None and _is_aware(bound) != _is_aware(out):
                return fail(
                    IssueCode.INVALID_DATE,
                    "Date timezone awareness does not match bound",
                )
        if self.minimum is not None and out < self.minimum:
            return fail(
                IssueCode.TOO_SMALL,
                f"Date must be on or after {self.minimum.isoformat()}",
            )
        if self.maximum is not None and out > self.maximum:
            return fail(
                IssueCode.TOO_BIG,
                f"Date must be on or before {self.maximum.isoformat()}",
            )
        return Ok(out)

    def min(self, bound: datetime) -> DateSchema:
        return replace(self, minimum=bound)

    def max(self, bound: datetime) -> DateSchema:
        return replace(self, maximum=bound)


@dataclass(frozen=True, slots=True)
class NullSchema(Schema[None, None]):
    def parse(self, value: Any = UNDEFINED) -> Ok[None] | Err[Issues]:
        if value is not None:
            return invalid_type("null", value)
        return Ok(None)


@dataclass(frozen=True, slots=True)
class UnknownSchema(Schema[Any, Any]):
    """Accepts anything, including UNDEFINED, and returns it unchanged."""

    def parse(self, value: Any = UNDEFINED) -> Ok[Any]:
        return Ok(value)


@dataclass(frozen=True, slots=True)
class LiteralSchema(Schema[L, L], Generic[L]):
    value: L

    def parse(self, value: Any = UNDEFINED) -> Ok[L] | Err[Issues]:
        if strict_equals(value, self.value):
            return Ok(value)
        if value is UNDEFINED:
            return invalid_type(repr(self.value), value)
        return fail(
            IssueCode.INVALID_LITERAL,
            f"Expected {self.value!r}, received {value!r}",
        )


def boolean() -> BooleanSchema:
    return BooleanSchema()


def string() -> StringSchema:
    return StringSchema()


def number() -> NumberSchema:
    return NumberSchema()


def date() -> DateSchema:
    return DateSchema()


def null_() -> NullSchema:
    return NullSchema()


def unknown() -> UnknownSchema:
    return UnknownSchema()


def literal(value: L) -> LiteralSchema[L]:
    """
    Match exactly one value by strict equality.

    Usage:
        literal("add")
        literal(None)
    """
    return LiteralSchema(value=value)
