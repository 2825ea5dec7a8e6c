"""
Helpers turning the condition shapes used throughout the exercises into
SQLAlchemy criteria:

- textual conditions with positional ``?`` placeholders (``"id = ?"``)
- example instances, where "zero" fields are ignored
- plain mappings, where every value is honored, "zero" or not
"""
import re

from sqlalchemy import bindparam, inspect, text
from sqlalchemy.sql.elements import Grouping

from .exceptions import ExerciseError, UnknownColumn

# Single-quoted SQL literals, with '' as the escaped quote
_QUOTED = re.compile(r"('(?:[^']|'')*')")


def positional_text(sql, args=()):
    """
    Return a bound ``text()`` clause for ``sql``, replacing each ``?`` outside
    string literals with the matching value from ``args``.

    A list or tuple value expands into an ``IN`` list: ``"id in ?"`` bound to
    ``["1", "2"]`` renders as ``id in (?, ?)``.
    """
    args = list(args)
    parts = _QUOTED.split(sql)
    params = []
    out = []

    for i, part in enumerate(parts):
        if i % 2:
            out.append(part)
            continue

        pieces = part.split("?")
        out.append(pieces[0])
        for piece in pieces[1:]:
            if len(params) == len(args):
                raise ExerciseError(f"Not enough arguments for placeholders in {sql!r}")

            name = f"p{len(params)}"
            value = args[len(params)]
            if isinstance(value, (list, tuple)):
                params.append(bindparam(name, list(value), expanding=True))
            else:
                params.append(bindparam(name, value))

            out.append(f":{name}")
            out.append(piece)

    if len(params) != len(args):
        raise ExerciseError(f"Got {len(args)} arguments for {len(params)} placeholders in {sql!r}")

    clause = text("".join(out))
    if params:
        clause = clause.bindparams(*params)
    return clause


def inline(condition, *args):
    """
    A parenthesized ``positional_text`` clause, usable as a WHERE criterion
    and negatable with ``not_()``.
    """
    return Grouping(positional_text(condition, args))


def _is_zero(value):
    if value is None:
        return True
    return isinstance(value, (str, int, float)) and not value


def non_zero_values(obj):
    """
    Mapped column values of ``obj`` that are not zero values (``None``, ``""``,
    ``0``, ``False``). Embedded composites are reported through their columns.
    """
    mapper = inspect(type(obj))
    values = {}
    for attr in mapper.column_attrs:
        value = getattr(obj, attr.key)
        if not _is_zero(value):
            values[attr.key] = value
    return values


def _column(model, key):
    mapper = inspect(model)
    if key not in mapper.column_attrs:
        raise UnknownColumn(f"'{model.__tablename__}' has no column '{key}'")
    return getattr(model, key)


def example_criteria(model, example):
    return [
        _column(model, key) == value
        for key, value in non_zero_values(example).items()
    ]


def mapping_criteria(model, mapping):
    return [
        _column(model, key) == value
        for key, value in mapping.items()
    ]
