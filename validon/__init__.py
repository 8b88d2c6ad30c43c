"""
Validon - composable runtime validation with derived input/output types.

Usage:
    from validon import format_issues, number, object_, string

    User = object_({
        "name": string().min(1),
        "age": number().int().nonnegative(),
        "email": string().email().optional(),
    })

    result = User.parse({"name": "John", "age": 30})
    if result.ok:
        print(result.value)
    else:
        print(format_issues(result.error))
"""

from .choices import (
    DiscriminatedUnionSchema,
    UnionSchema,
    discriminated_union,
    union,
)
from .context import ParseOptions, current_options, parse_context
from .core import (
    NullableSchema,
    NullishSchema,
    OptionalSchema,
    RefineSchema,
    Schema,
    TransformSchema,
    default,
    nullable,
    nullish,
    optional,
    transform,
)
from .schema import input_type, output_type, to_pydantic
from .structures import (
    ArraySchema,
    ObjectSchema,
    RecordSchema,
    TupleSchema,
    array,
    object_,
    record,
    tuple_,
)
from .types import (
    UNDEFINED,
    Err,
    Issue,
    IssueCode,
    Ok,
    Result,
    SchemaError,
    Undefined,
    ValidationError,
    format_issues,
)
from .validators import (
    BooleanSchema,
    DateSchema,
    LiteralSchema,
    NullSchema,
    NumberSchema,
    StringSchema,
    UnknownSchema,
    boolean,
    date,
    literal,
    null_,
    number,
    string,
    unknown,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    "Issue",
    "IssueCode",
    "ValidationError",
    "SchemaError",
    "format_issues",
    "UNDEFINED",
    "Undefined",
    # Core
    "Schema",
    "OptionalSchema",
    "NullableSchema",
    "NullishSchema",
    "TransformSchema",
    "RefineSchema",
    "optional",
    "nullable",
    "nullish",
    "default",
    "transform",
    # Primitives
    "BooleanSchema",
    "StringSchema",
    "NumberSchema",
    "DateSchema",
    "NullSchema",
    "UnknownSchema",
    "LiteralSchema",
    "boolean",
    "string",
    "number",
    "date",
    "null_",
    "unknown",
    "literal",
    # Containers
    "ArraySchema",
    "TupleSchema",
    "RecordSchema",
    "ObjectSchema",
    "array",
    "tuple_",
    "record",
    "object_",
    # Choices
    "UnionSchema",
    "DiscriminatedUnionSchema",
    "union",
    "discriminated_union",
    # Types
    "input_type",
    "output_type",
    "to_pydantic",
    # Options
    "ParseOptions",
    "parse_context",
    "current_options",
]
