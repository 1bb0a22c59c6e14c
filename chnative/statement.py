"""Binding of positional and named arguments into query text."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from chnative.word_matcher import WordMatcher

_PARAM_PATTERN = re.compile(r"@(\w*)|.", re.DOTALL)
_KEYWORD_CHARS = frozenset("=<>(,+-*/[")


@runtime_checkable
class _ExternalTable(Protocol):
    """A table sent alongside a query; bound by its name."""

    name: str
    values: Any
    columns: Any


@dataclass(frozen=True)
class NamedValue:
    """An argument value, optionally named, with its 1-based position."""

    value: Any
    name: str = ""
    ordinal: int = 0


def convert_old_args(args: Iterable[Any]) -> list[NamedValue]:
    """Wrap plain positional values as unnamed arguments numbered from 1."""
    return [NamedValue(value, ordinal=number) for number, value in enumerate(args, 1)]


def bind(
    query: str,
    args: Sequence[NamedValue],
    quote: Callable[[Any], str],
) -> tuple[str, list[Any]]:
    """Substitute arguments into a query.

    A ``?`` is replaced by the next unnamed argument when it follows a keyword
    or operator; ``@name`` is replaced by every argument of that name. External
    tables are written by name and returned alongside the query text.
    """
    if not args:
        return query, []

    external_tables: list[Any] = []
    out: list[str] = []

    def emit(value: Any) -> None:
        if isinstance(value, _ExternalTable):
            out.append(value.name)
            external_tables.append(value)
        else:
            out.append(quote(value))

    like = WordMatcher("like")
    limit = WordMatcher("limit")
    offset = WordMatcher("offset")
    between = WordMatcher("between")
    and_ = WordMatcher("and")
    in_ = WordMatcher("in")
    from_ = WordMatcher("from")
    join = WordMatcher("join")
    select = WordMatcher("select")

    index = 0
    keyword = False
    in_between = False

    for match in _PARAM_PATTERN.finditer(query):
        param = match.group(1)
        if param is not None:
            if param:
                for arg in args:
                    if arg.name and arg.name == param:
                        emit(arg.value)
            continue
        char = match.group(0)
        if char == "?":
            if keyword and index < len(args) and not args[index].name:
                emit(args[index].value)
                index += 1
            else:
                out.append(char)
            continue
        if char in _KEYWORD_CHARS:
            keyword = True
        elif (
            limit.match(char)
            or offset.match(char)
            or like.match(char)
            or in_.match(char)
            or from_.match(char)
            or join.match(char)
            or select.match(char)
        ):
            keyword = True
        elif between.match(char):
            keyword = True
            in_between = True
        elif in_between and and_.match(char):
            keyword = True
            in_between = False
        else:
            keyword = keyword and char.isspace()
        out.append(char)

    return "".join(out), external_tables