"""
SQL text helpers: identifier quoting and literal rendering.

Literal rendering is the generic part of the quoting chain; dialect
strategies special-case some values and hand the rest to
:func:`quote_literal`.
"""
import datetime
import decimal
import math
from typing import Any

_QUOTED_TRUE = 'TRUE'
_QUOTED_FALSE = 'FALSE'


def quote_identifier(identifier: str) -> str:
    """Quote a table or column name using standard SQL double quotes.

    >>> quote_identifier('order')
    '"order"'
    >>> quote_identifier('a"b')
    '"a""b"'
    """
    return '"' + identifier.replace('"', '""') + '"'


def quote_string(value: str) -> str:
    """Escape single quotes for embedding in a string literal.

    >>> quote_string("O'Neil")
    "O''Neil"
    """
    return value.replace("'", "''")


def quote_binary(value: bytes | str) -> str:
    """Render bytes as a hexadecimal literal.

    >>> quote_binary(b'\\x01\\xff')
    "X'01ff'"
    """
    if isinstance(value, str):
        value = value.encode()
    return f"X'{value.hex()}'"


def quoted_date(value: datetime.date | datetime.time) -> str:
    """Format a date or time value the way the database parses it.

    >>> quoted_date(datetime.datetime(2024, 1, 2, 3, 4, 5))
    '2024-01-02 03:04:05'
    >>> quoted_date(datetime.date(2024, 1, 2))
    '2024-01-02'
    """
    if isinstance(value, datetime.datetime):
        return value.isoformat(sep=' ')
    return value.isoformat()


def quote_literal(value: Any) -> str:
    """Render a Python value as a SQL literal.

    >>> quote_literal(None)
    'NULL'
    >>> quote_literal(True)
    'TRUE'
    >>> quote_literal(decimal.Decimal('1.50'))
    '1.50'
    >>> quote_literal("it's")
    "'it''s'"
    """
    if value is None:
        return 'NULL'
    if value is True:
        return _QUOTED_TRUE
    if value is False:
        return _QUOTED_FALSE
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return f"'{value}'"
        return repr(value)
    if isinstance(value, decimal.Decimal):
        return format(value, 'f')
    if isinstance(value, datetime.date | datetime.time):
        return f"'{quoted_date(value)}'"
    if isinstance(value, bytes | bytearray | memoryview):
        return quote_binary(bytes(value))
    return f"'{quote_string(str(value))}'"
