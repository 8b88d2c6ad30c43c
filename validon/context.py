"""
Context manager for parse-time options (e.g., union diagnostics).
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Options consulted by validators while parsing."""

    union_issues: bool = False


_options: ContextVar[ParseOptions] = ContextVar(
    "parse_options", default=ParseOptions()
)


def current_options() -> ParseOptions:
    """Return the options active in the current context."""
    return _options.get()


@contextmanager
def parse_context(*, union_issues: bool = False):
    """
    Context manager for parse-time options.

    Args:
        union_issues: If True, a union that matches none of its candidates
                      attaches every candidate's issues as the `detail` of
                      its `invalid_union` issue.

    Example:
        from validon import number, parse_context, string, union

        schema = union([string(), number()])

        schema.parse(True).error[0].detail  # None

        with parse_context(union_issues=True):
            schema.parse(True).error[0].detail  # [[Issue(...)], [Issue(...)]]
    """
    token = _options.set(ParseOptions(union_issues=union_issues))
    try:
        yield
    finally:
        _options.reset(token)
