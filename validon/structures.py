"""
Container validators: array, tuple, record and keyed object.

Array, tuple and record stop at the first failing child. Object collects
every field failure, in field-declaration order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from .core import Schema, invalid_type
from .types import UNDEFINED, Err, IssueCode, Issues, Ok, fail, prefixed

I = TypeVar("I")
O = TypeVar("O")
KI = TypeVar("KI")
KO = TypeVar("KO")


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


@dataclass(frozen=True, slots=True)
class ArraySchema(Schema[Sequence[I], list[O]], Generic[I, O]):
    """Validator for homogeneous list/tuple input. Output is a new list."""

    element: Schema[I, O]
    min_length: int | None = None
    max_length: int | None = None
    exact_length: int | None = None

    def parse(self, value: Any = UNDEFINED) -> Ok[list[O]] | Err[Issues]:
        if not is_sequence(value):
            return invalid_type("array", value)

        n = len(value)
        if self.min_length is not None and n < self.min_length:
            return fail(
                IssueCode.TOO_SMALL,
                f"Array must contain at least {self.min_length} element(s)",
            )
        if self.max_length is not None and n > self.max_length:
            return fail(
                IssueCode.TOO_BIG,
                f"Array must contain at most {self.max_length} element(s)",
            )
        if self.exact_length is not None and n != self.exact_length:
            code = IssueCode.TOO_SMALL if n < self.exact_length else IssueCode.TOO_BIG
            return fail(
                code, f"Array must contain exactly {self.exact_length} element(s)"
            )

        out: list[O] = []
        for i, item in enumerate(value):
            result = self.element.parse(item)
            if isinstance(result, Err):
                return prefixed(result, i)
            out.append(result.value)
        return Ok(out)

    def min(self, n: int) -> ArraySchema[I, O]:
        return replace(self, min_length=n)

    def max(self, n: int) -> ArraySchema[I, O]:
        return replace(self, max_length=n)

    def length(self, n: int) -> ArraySchema[I, O]:
        return replace(self, exact_length=n)

    def nonempty(self) -> ArraySchema[I, O]:
        return self.min(1)


@dataclass(frozen=True, slots=True)
class TupleSchema(Schema[Sequence[Any], tuple[Any, ...]]):
    """
    Validator for fixed-position sequences with an optional rest element.

    Without a rest schema the input length must equal the number of items;
    with one, every position past the items is checked by the rest schema.
    """

    items: tuple[Schema[Any, Any], ...]
    rest_schema: Schema[Any, Any] | None = None

    def parse(self, value: Any = UNDEFINED) -> Ok[tuple[Any, ...]] | Err[Issues]:
        if not is_sequence(value):
            return invalid_type("array", value)

        n = len(self.items)
        if self.rest_schema is None and len(value) != n:
            return fail(
                IssueCode.INVALID_LENGTH,
                f"Expected array of length {n}, received length {len(value)}",
            )
        if self.rest_schema is not None and len(value) < n:
            return fail(
                IssueCode.INVALID_LENGTH,
                f"Expected array of at least {n} element(s), "
                f"received length {len(value)}",
            )

        out = []
        for i, item in enumerate(value):
            result = self.index(i).parse(item)
            if isinstance(result, Err):
                return prefixed(result, i)
            out.append(result.value)
        return Ok(tuple(out))

    def index(self, position: int) -> Schema[Any, Any]:
        """Schema governing `position`, falling back to the rest schema."""
        if position < 0:
            raise IndexError(f"Tuple position must be non-negative: {position}")
        if position < len(self.items):
            return self.items[position]
        if self.rest_schema is not None:
            return self.rest_schema
        raise IndexError(
            f"Tuple has {len(self.items)} position(s) and no rest schema: {position}"
        )

    def rest(self, schema: Schema[Any, Any]) -> TupleSchema:
        return replace(self, rest_schema=schema)


@dataclass(frozen=True, slots=True)
class RecordSchema(Schema[Mapping[KI, I], dict[KO, O]], Generic[KI, KO, I, O]):
    """
    Validator for homogeneous mappings.

    Every value is checked by `value_schema`; when `key_schema` is set,
    keys are checked (and possibly transformed) too.
    """

    value_schema: Schema[I, O]
    key_schema: Schema[KI, KO] | None = None

    def parse(self, value: Any = UNDEFINED) -> Ok[dict[KO, O]] | Err[Issues]:
        if not is_mapping(value):
            return invalid_type("object", value)

        out: dict[Any, O] = {}
        for key, item in value.items():
            out_key = key
            if self.key_schema is not None:
                key_result = self.key_schema.parse(key)
                if isinstance(key_result, Err):
                    return prefixed(key_result, key)
                out_key = key_result.value

            result = self.value_schema.parse(item)
            if isinstance(result, Err):
                return prefixed(result, key)
            out[out_key] = result.value
        return Ok(out)

    def value(self) -> Schema[I, O]:
        return self.value_schema


@dataclass(frozen=True, slots=True)
class ObjectSchema(Schema[Mapping[str, Any], dict[str, Any]]):
    """
    Validator for mappings with named, heterogeneous fields.

    A field is optional only if its schema accepts UNDEFINED. Undeclared
    input keys are dropped; fields that validate to UNDEFINED are omitted.
    """

    shape: Mapping[str, Schema[Any, Any]]

    def __post_init__(self) -> None:
        if not isinstance(self.shape, MappingProxyType):
            object.__setattr__(self, "shape", MappingProxyType(dict(self.shape)))

    def parse(self, value: Any = UNDEFINED) -> Ok[dict[str, Any]] | Err[Issues]:
        if not is_mapping(value):
            return invalid_type("object", value)

        out: dict[str, Any] = {}
        errors: Issues = []

        for key, schema in self.shape.items():
            result = schema.parse(value.get(key, UNDEFINED))
            if isinstance(result, Err):
                errors.extend(prefixed(result, key).error)
            elif result.value is not UNDEFINED:
                out[key] = result.value

        return Err(errors) if errors else Ok(out)

    def field(self, name: str) -> Schema[Any, Any]:
        """Schema declared for `name`. Raises KeyError if undeclared."""
        return self.shape[name]

    def keyof(self) -> tuple[str, ...]:
        return tuple(self.shape)

    def _check_names(self, names: tuple[str, ...]) -> None:
        unknown = [name for name in names if name not in self.shape]
        if unknown:
            raise KeyError(f"Unknown field(s): {', '.join(unknown)}")

    def pick(self, *names: str) -> ObjectSchema:
        """Keep only `names`. Raises KeyError for undeclared names."""
        self._check_names(names)
        return ObjectSchema(
            shape={k: v for k, v in self.shape.items() if k in names}
        )

    def omit(self, *names: str) -> ObjectSchema:
        """Drop `names`. Raises KeyError for undeclared names."""
        self._check_names(names)
        return ObjectSchema(
            shape={k: v for k, v in self.shape.items() if k not in names}
        )

    def partial(self) -> ObjectSchema:
        """Make every field optional. Nested objects are left as they are."""
        return ObjectSchema(shape={k: v.optional() for k, v in self.shape.items()})

    def extend(
        self, fields: Mapping[str, Schema[Any, Any]] | ObjectSchema
    ) -> ObjectSchema:
        """Add fields; same-named fields are replaced by the new schema."""
        if isinstance(fields, ObjectSchema):
            fields = fields.shape
        return ObjectSchema(shape={**self.shape, **fields})


def array(element: Schema[I, O]) -> ArraySchema[I, O]:
    return ArraySchema(element=element)


def tuple_(
    items: Sequence[Schema[Any, Any]], rest: Schema[Any, Any] | None = None
) -> TupleSchema:
    """
    Usage:
        tuple_([string(), number()])
        tuple_([string()], rest=number())
    """
    return TupleSchema(items=tuple(items), rest_schema=rest)


def record(
    value_schema: Schema[I, O], keys: Schema[KI, KO] | None = None
) -> RecordSchema[KI, KO, I, O]:
    return RecordSchema(value_schema=value_schema, key_schema=keys)


def object_(shape: Mapping[str, Schema[Any, Any]]) -> ObjectSchema:
    """
    Usage:
        object_({
            "name": string(),
            "age": number().int().nonnegative(),
            "email": string().email().optional(),
        })
    """
    return ObjectSchema(shape=shape)
