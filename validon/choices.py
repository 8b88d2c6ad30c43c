"""
Choice validators: first-match union and tag-dispatched discriminated union.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from .context import current_options
from .core import Schema, invalid_type, type_name
from .structures import ObjectSchema, is_mapping
from .types import UNDEFINED, Err, IssueCode, Issues, Ok, SchemaError, fail
from .validators import LiteralSchema, is_number

logger = logging.getLogger(__name__)

I = TypeVar("I")
O = TypeVar("O")


@dataclass(frozen=True, slots=True)
class UnionSchema(Schema[I, O], Generic[I, O]):
    """
    Try each option in order; the first success wins.

    Inputs accepted by several options always take the earliest one.
    """

    options: tuple[Schema[Any, Any], ...]

    def parse(self, value: Any = UNDEFINED) -> Ok[O] | Err[Issues]:
        failures: list[Issues] = []
        for option in self.options:
            result = option.parse(value)
            if isinstance(result, Ok):
                return result
            failures.append(result.error)

        logger.debug(
            "No union option matched %s input (%d options)",
            type_name(value),
            len(self.options),
        )
        detail = failures if current_options().union_issues else None
        return fail(
            IssueCode.INVALID_UNION,
            "Invalid input: no union option matched",
            detail=detail,
        )


def _tag_key(tag: Any) -> tuple[type, Any]:
    # int and float share one kind (1 matches 1.0); bool and str stay apart.
    if is_number(tag):
        return (float, tag)
    return (type(tag), tag)


@dataclass(frozen=True, slots=True)
class DiscriminatedUnionSchema(Schema[Any, dict[str, Any]]):
    """
    Dispatch on the literal value of one shared field.

    Every option must be an object schema declaring `discriminator` with a
    literal schema. The whole input is then parsed by the matched option
    only; no other option is attempted.
    """

    discriminator: str
    options: tuple[ObjectSchema, ...]
    lookup: dict[tuple[type, Any], ObjectSchema] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        lookup: dict[tuple[type, Any], ObjectSchema] = {}
        for position, option in enumerate(self.options):
            if not isinstance(option, ObjectSchema):
                raise SchemaError(
                    f"Discriminated union option {position} must be an object "
                    f"schema, got {type(option).__name__}"
                )
            if self.discriminator not in option.shape:
                raise SchemaError(
                    f"Discriminated union option {position} does not declare "
                    f"discriminator field '{self.discriminator}'"
                )
            tag_schema = option.field(self.discriminator)
            if not isinstance(tag_schema, LiteralSchema):
                raise SchemaError(
                    f"Discriminator field '{self.discriminator}' of option "
                    f"{position} must be a literal schema, got "
                    f"{type(tag_schema).__name__}"
                )
            # First declaration wins for duplicate tag values.
            lookup.setdefault(_tag_key(tag_schema.value), option)

        logger.debug(
            "Built discriminated union on '%s' with tags %s",
            self.discriminator,
            [option.field(self.discriminator).value for option in lookup.values()],
        )
        object.__setattr__(self, "lookup", lookup)

    def tags(self) -> tuple[Any, ...]:
        """Discriminator values, in option order."""
        return tuple(
            option.field(self.discriminator).value for option in self.lookup.values()
        )

    def option_for(self, tag: Any) -> ObjectSchema | None:
        """Option selected by a discriminator value, if any."""
        try:
            return self.lookup.get(_tag_key(tag))
        except TypeError:
            # Unhashable tag values can never equal a literal.
            return None

    def parse(self, value: Any = UNDEFINED) -> Ok[dict[str, Any]] | Err[Issues]:
        if not is_mapping(value):
            return invalid_type("object", value)

        if self.discriminator not in value:
            return fail(
                IssueCode.INVALID_DISCRIMINATOR,
                f"Missing discriminator field '{self.discriminator}'",
                path=(self.discriminator,),
            )

        tag = value[self.discriminator]
        option = self.option_for(tag)
        if option is None:
            logger.debug(
                "Unrecognized discriminator value %r for '%s'", tag, self.discriminator
            )
            expected = " | ".join(repr(t) for t in self.tags())
            return fail(
                IssueCode.INVALID_DISCRIMINATOR,
                f"Invalid discriminator value {tag!r}. Expected {expected}",
                path=(self.discriminator,),
                detail=tag,
            )

        return option.parse(value)


def union(options: Sequence[Schema[I, O]]) -> UnionSchema[I, O]:
    """
    First-match union over `options`.

    Usage:
        union([string(), number()])
        union([literal("a"), literal("b")])
    """
    return UnionSchema(options=tuple(options))


def discriminated_union(
    discriminator: str, options: Sequence[ObjectSchema]
) -> DiscriminatedUnionSchema:
    """
    Usage:
        discriminated_union("type", [
            object_({"type": literal("add"), "input": number()}),
            object_({"type": literal("reset")}),
        ])
    """
    return DiscriminatedUnionSchema(discriminator=discriminator, options=tuple(options))
