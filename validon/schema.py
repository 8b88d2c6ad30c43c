"""
Type derivation and Pydantic interop for validon schemas.

Provides input_type(), output_type() and to_pydantic().

Each schema's input and output types follow structurally from its kind and
its children: modifiers add absence markers, default removes UNDEFINED from
the output, transform takes the mapper's return annotation, and unions
join their members.
"""

from __future__ import annotations

import typing
from collections.abc import Mapping, Sequence
from datetime import date as date_type
from datetime import datetime
from typing import Any, Literal, NoReturn, Union, get_args, get_origin

from pydantic import create_model
from typing_extensions import NotRequired, TypedDict, Unpack

from .choices import DiscriminatedUnionSchema, UnionSchema
from .core import (
    Fallback,
    NullableSchema,
    NullishSchema,
    OptionalSchema,
    RefineSchema,
    Schema,
    TransformSchema,
)
from .structures import ArraySchema, ObjectSchema, RecordSchema, TupleSchema
from .types import UNDEFINED, Undefined
from .validators import (
    BooleanSchema,
    DateSchema,
    LiteralSchema,
    NullSchema,
    NumberSchema,
    StringSchema,
    UnknownSchema,
)

NoneType = type(None)

Side = Literal["input", "output"]


def _members(t: Any) -> tuple[Any, ...]:
    if get_origin(t) is Union:
        return get_args(t)
    return (t,)


def _join(members: Sequence[Any]) -> Any:
    if not members:
        return NoReturn
    return Union[tuple(members)]  # type: ignore[return-value]


def may_be_undefined(t: Any) -> bool:
    """Whether values of type `t` may be the absence marker."""
    return t is Any or any(m == Undefined for m in _members(t))


def without_undefined(t: Any) -> Any:
    if t is Any:
        return t
    return _join([m for m in _members(t) if m != Undefined])


def _mapper_return(mapper: Any) -> Any:
    if isinstance(mapper, type):
        return mapper
    try:
        hints = typing.get_type_hints(mapper)
    except (TypeError, NameError):
        return Any
    return hints.get("return", Any)


def derive_type(schema: Schema[Any, Any], side: Side, name: str = "Object") -> Any:
    """
    Derive the input or output annotation of a schema.

    Objects become TypedDicts named `name`, with NotRequired members for
    fields that may be absent.
    """
    match schema:
        case BooleanSchema():
            return bool
        case StringSchema():
            return str
        case NumberSchema():
            return Union[int, float]
        case DateSchema():
            if side == "input":
                return Union[datetime, date_type, str, int, float]
            return datetime
        case NullSchema():
            return NoneType
        case UnknownSchema():
            return Any
        case LiteralSchema(value=value):
            return Literal[value]
        case OptionalSchema(inner=inner, fallback=fallback):
            inner_t = derive_type(inner, side, name)
            if side == "output" and fallback is not UNDEFINED:
                return inner_t
            return Union[inner_t, Undefined]
        case NullableSchema(inner=inner):
            return Union[derive_type(inner, side, name), None]
        case NullishSchema(inner=inner):
            return Union[derive_type(inner, side, name), None, Undefined]
        case TransformSchema(inner=inner, mapper=mapper):
            inner_t = derive_type(inner, side, name)
            if side == "input":
                return inner_t
            if isinstance(mapper, Fallback):
                return without_undefined(inner_t)
            return _mapper_return(mapper)
        case RefineSchema(inner=inner):
            return derive_type(inner, side, name)
        case ArraySchema(element=element):
            element_t = derive_type(element, side, name)
            if side == "input":
                return Sequence[element_t]
            return list[element_t]
        case TupleSchema(items=items, rest_schema=rest):
            item_ts = [derive_type(item, side, name) for item in items]
            if rest is not None:
                item_ts.append(Unpack[tuple[derive_type(rest, side, name), ...]])
            if not item_ts:
                return tuple[()]
            return tuple[tuple(item_ts)]
        case RecordSchema(value_schema=value_schema, key_schema=key_schema):
            key_t = str if key_schema is None else derive_type(key_schema, side, name)
            value_t = derive_type(value_schema, side, name)
            if side == "input":
                return Mapping[key_t, value_t]
            return dict[key_t, value_t]
        case ObjectSchema(shape=shape):
            fields: dict[str, Any] = {}
            for key, field_schema in shape.items():
                field_t = derive_type(field_schema, side, f"{name}_{key}")
                if may_be_undefined(field_t):
                    fields[key] = NotRequired[without_undefined(field_t)]
                else:
                    fields[key] = field_t
            return TypedDict(name, fields)  # type: ignore[operator]
        case UnionSchema(options=options) | DiscriminatedUnionSchema(options=options):
            return _join([derive_type(option, side, name) for option in options])

    raise TypeError(f"Cannot derive a type for {type(schema).__name__}")


def input_type(schema: Schema[Any, Any], name: str = "Object") -> Any:
    """Broadest input annotation the schema meaningfully accepts."""
    return derive_type(schema, "input", name)


def output_type(schema: Schema[Any, Any], name: str = "Object") -> Any:
    """Annotation of the value guaranteed on success."""
    return derive_type(schema, "output", name)


def to_pydantic(name: str, schema: ObjectSchema) -> type:
    """
    Compile an object schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: Object schema whose output types become field annotations

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", object_({
            "name": string(),
            "email": string().optional(),
        }))
        user = User(name="Alice")
    """
    if not isinstance(schema, ObjectSchema):
        raise TypeError("to_pydantic() requires an object schema")

    fields: dict[str, Any] = {}
    for key, field_schema in schema.shape.items():
        field_name = f"{name}_{key}"
        field_t = without_undefined(output_type(field_schema, field_name))
        if not may_be_undefined(input_type(field_schema, field_name)):
            fields[key] = (field_t, ...)
            continue
        fallback = _field_default(field_schema)
        if fallback is None:
            field_t = Union[field_t, None]
        fields[key] = (field_t, fallback)

    return create_model(name, **fields)


def _field_default(schema: Schema[Any, Any]) -> Any:
    """Value substituted for an absent field, or None if there is none."""
    match schema:
        case TransformSchema(mapper=Fallback(value=value)):
            return value
        case OptionalSchema(fallback=fallback) if fallback is not UNDEFINED:
            return fallback
    return None
