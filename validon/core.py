"""
Core schema contract for validon.

Every validator kind is a frozen dataclass implementing `Schema[I, O]`
directly, where I is the input type it meaningfully accepts and O the
output type it guarantees on success. Configuration methods never mutate
the receiver; they return a new schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from .types import (
    UNDEFINED,
    Err,
    IssueCode,
    Issues,
    Ok,
    Undefined,
    fail,
)

if TYPE_CHECKING:
    from .choices import UnionSchema
    from .structures import ArraySchema

I = TypeVar("I")
O = TypeVar("O")
U = TypeVar("U")


def type_name(value: Any) -> str:
    """Name of a value's runtime kind, as used in error messages."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    return type(value).__name__


def invalid_type(expected: str, value: Any) -> Err[Issues]:
    """Type-mismatch failure; absent input reads as "Required"."""
    if value is UNDEFINED:
        return fail(IssueCode.INVALID_TYPE, "Required")
    return fail(
        IssueCode.INVALID_TYPE, f"Expected {expected}, received {type_name(value)}"
    )


class Schema(Generic[I, O]):
    """
    Shared capability interface of all validator kinds.

    Subclasses implement `parse`; everything else is derived from it.
    """

    __slots__ = ()

    def parse(self, value: Any = UNDEFINED) -> Ok[O] | Err[Issues]:
        """
        Validate a value.

        Returns:
            Ok(output) if validation passes
            Err([Issue, ...]) if validation fails
        """
        raise NotImplementedError

    async def parse_async(self, value: Any = UNDEFINED) -> Ok[O] | Err[Issues]:
        """Awaitable form of `parse`. Runs the same synchronous traversal."""
        return self.parse(value)

    def is_valid(self, value: Any = UNDEFINED) -> bool:
        return self.parse(value).is_ok()

    def transform(self, mapper: Callable[[O], U]) -> TransformSchema[I, U]:
        """
        Map the output on success. Failures skip the mapper.

        Usage:
            number().transform(lambda v: "NO" if v > 5 else "YES")
        """
        return TransformSchema(inner=self, mapper=mapper)

    def refine(
        self, check: Callable[[O], bool], message: str = "Invalid value"
    ) -> RefineSchema[I, O]:
        """
        Add a custom constraint evaluated after this schema succeeds.

        Usage:
            string().refine(str.isalpha, "Must be alphabetic")
        """
        return RefineSchema(inner=self, check=check, message=message)

    def optional(self, default: Any = UNDEFINED) -> OptionalSchema[I, O]:
        """Accept an absent value, producing `default` (or UNDEFINED)."""
        return OptionalSchema(inner=self, fallback=default)

    def nullable(self) -> NullableSchema[I, O]:
        """Accept an explicit None."""
        return NullableSchema(inner=self)

    def nullish(self) -> NullishSchema[I, O]:
        """Accept both UNDEFINED and None, passing either through."""
        return NullishSchema(inner=self)

    def default(self, value: O) -> TransformSchema[I | Undefined, O]:
        """
        Substitute `value` for an absent input.

        Equivalent to `.optional()` followed by a transform replacing
        UNDEFINED; the output never contains the absence marker.
        """
        return self.optional().transform(Fallback(value))

    def array(self) -> ArraySchema[I, O]:
        """Shorthand for `array(self)`."""
        from .structures import ArraySchema

        return ArraySchema(element=self)

    def or_(self, other: Schema[Any, U]) -> UnionSchema[Any, O | U]:
        """Shorthand for `union(self, other)`."""
        from .choices import UnionSchema

        return UnionSchema(options=(self, other))


@dataclass(frozen=True, slots=True)
class Fallback(Generic[O]):
    """Mapper used by `.default()`: replaces UNDEFINED with a fixed value."""

    value: O

    def __call__(self, parsed: Any) -> O:
        if parsed is UNDEFINED:
            return self.value
        return parsed


@dataclass(frozen=True, slots=True)
class OptionalSchema(Schema[I | Undefined, O | Undefined], Generic[I, O]):
    inner: Schema[I, O]
    fallback: Any = UNDEFINED

    def parse(self, value: Any = UNDEFINED) -> Ok[Any] | Err[Issues]:
        if value is UNDEFINED:
            return Ok(self.fallback)
        return self.inner.parse(value)


@dataclass(frozen=True, slots=True)
class NullableSchema(Schema[I | None, O | None], Generic[I, O]):
    inner: Schema[I, O]

    def parse(self, value: Any = UNDEFINED) -> Ok[Any] | Err[Issues]:
        if value is None:
            return Ok(None)
        return self.inner.parse(value)


@dataclass(frozen=True, slots=True)
class NullishSchema(
    Schema[I | None | Undefined, O | None | Undefined], Generic[I, O]
):
    inner: Schema[I, O]

    def parse(self, value: Any = UNDEFINED) -> Ok[Any] | Err[Issues]:
        if value is None or value is UNDEFINED:
            return Ok(value)
        return self.inner.parse(value)


@dataclass(frozen=True, slots=True)
class TransformSchema(Schema[I, O], Generic[I, O]):
    """
    Apply `mapper` to the inner schema's output.

    The mapper is assumed total: anything it raises propagates to the
    caller as-is rather than becoming a validation failure.
    """

    inner: Schema[I, Any]
    mapper: Callable[[Any], O]

    def parse(self, value: Any = UNDEFINED) -> Ok[O] | Err[Issues]:
        result = self.inner.parse(value)
        if isinstance(result, Err):
            return result
        return Ok(self.mapper(result.value))


@dataclass(frozen=True, slots=True)
class RefineSchema(Schema[I, O], Generic[I, O]):
    inner: Schema[I, O]
    check: Callable[[O], bool]
    message: str = "Invalid value"

    def parse(self, value: Any = UNDEFINED) -> Ok[O] | Err[Issues]:
        result = self.inner.parse(value)
        if isinstance(result, Err):
            return result
        if not self.check(result.value):
            return fail(IssueCode.CUSTOM, self.message)
        return result


def optional(inner: Schema[I, O], default: Any = UNDEFINED) -> OptionalSchema[I, O]:
    return inner.optional(default)


def nullable(inner: Schema[I, O]) -> NullableSchema[I, O]:
    return inner.nullable()


def nullish(inner: Schema[I, O]) -> NullishSchema[I, O]:
    return inner.nullish()


def default(inner: Schema[I, O], value: O) -> TransformSchema[I | Undefined, O]:
    return inner.default(value)


def transform(inner: Schema[I, O], mapper: Callable[[O], U]) -> TransformSchema[I, U]:
    return inner.transform(mapper)
