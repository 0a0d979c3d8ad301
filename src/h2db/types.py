"""
Abstract column types.

DDL emitters take an abstract type symbol such as ``'integer'`` or
``'binary'`` plus an optional limit, precision and scale. Callers holding
SQLAlchemy type objects can pass those instead; they are reduced to the
same tuple here.
"""
import logging
from typing import Any, NamedTuple

import sqlalchemy as sa

logger = logging.getLogger(__name__)

# Size of the largest value stored in a BINARY column before BLOB is used
BINARY_LIMIT = 2 * 1024 * 1024


class TypeSpec(NamedTuple):
    """Abstract type symbol with its size arguments."""
    type: str
    limit: int | None = None
    precision: int | None = None
    scale: int | None = None


# Order matters: subclasses are listed before their bases
_SQLALCHEMY_TYPES: list[tuple[type, str, int | None]] = [
    (sa.BigInteger, 'bigint', None),
    (sa.SmallInteger, 'smallint', None),
    (sa.Integer, 'integer', None),
    (sa.Double, 'double', None),
    (sa.REAL, 'real', None),
    (sa.Float, 'float', 8),
    (sa.Numeric, 'decimal', None),
    (sa.Text, 'text', None),
    (sa.CHAR, 'char', None),
    (sa.String, 'string', None),
    (sa.BLOB, 'blob', None),
    (sa.LargeBinary, 'binary', None),
    (sa.BINARY, 'binary', None),
    (sa.VARBINARY, 'binary', None),
    (sa.Boolean, 'boolean', None),
    (sa.DateTime, 'timestamp', None),
    (sa.Date, 'date', None),
    (sa.Time, 'time', None),
    (sa.Uuid, 'uuid', None),
    (sa.ARRAY, 'array', None),
]


def _from_sqlalchemy(type_: sa.types.TypeEngine) -> TypeSpec:
    for sa_type, symbol, default_limit in _SQLALCHEMY_TYPES:
        if isinstance(type_, sa_type):
            break
    else:
        symbol, default_limit = type_.__visit_name__.lower(), None

    limit = getattr(type_, 'length', None) or default_limit
    precision = scale = None
    if symbol == 'decimal':
        precision = type_.precision
        scale = type_.scale
    return TypeSpec(symbol, limit, precision, scale)


def coerce_type(type_: Any, limit: int | None = None,
                precision: int | None = None,
                scale: int | None = None) -> TypeSpec:
    """Reduce a type argument to a :class:`TypeSpec`.

    Accepts a symbol (``'integer'``), a SQLAlchemy type class
    (``sa.Integer``) or instance (``sa.String(40)``). Explicit size
    arguments win over the sizes carried by a SQLAlchemy type.

    >>> coerce_type('INTEGER', 2)
    TypeSpec(type='integer', limit=2, precision=None, scale=None)
    >>> coerce_type(sa.String(40))
    TypeSpec(type='string', limit=40, precision=None, scale=None)
    >>> coerce_type(sa.Numeric(10, 2))
    TypeSpec(type='decimal', limit=None, precision=10, scale=2)
    """
    if isinstance(type_, type) and issubclass(type_, sa.types.TypeEngine):
        type_ = type_()

    if isinstance(type_, sa.types.TypeEngine):
        spec = _from_sqlalchemy(type_)
        return TypeSpec(
            spec.type,
            limit if limit is not None else spec.limit,
            precision if precision is not None else spec.precision,
            scale if scale is not None else spec.scale,
        )

    return TypeSpec(str(type_).lower(), limit, precision, scale)
