"""
Column metadata read back from the database.

A :class:`Column` starts out holding what the driver reported and is then
normalized in place by the owning strategy (see
``DatabaseStrategy.normalize_column``). Columns are rebuilt on every schema
read; nothing here is persisted.
"""
import logging
import re
from typing import Any, NamedTuple, Self

logger = logging.getLogger(__name__)

_NUMERIC_WITH_SCALE = re.compile(r'^(decimal|numeric|number|dec)\b', re.IGNORECASE)


class TypeRule(NamedTuple):
    """One entry of an ordered type-string rule table.

    ``pattern`` is matched case-insensitively against the reported type;
    the first matching rule supplies the canonical type name and limit.
    """
    pattern: re.Pattern
    sql_type: str
    limit: int | None


def type_rules(*rules: tuple[str, str, int | None]) -> tuple[TypeRule, ...]:
    """Compile ``(regex, sql_type, limit)`` tuples into an ordered rule table.
    """
    return tuple(TypeRule(re.compile(pattern, re.IGNORECASE), sql_type, limit)
                 for pattern, sql_type, limit in rules)


def match_type_rule(rules: tuple[TypeRule, ...], sql_type: str) -> TypeRule | None:
    """Return the first rule matching ``sql_type``, or None.
    """
    for rule in rules:
        if rule.pattern.search(sql_type):
            return rule
    return None


def compose_sql_type(type_name: str, size: int | None = None,
                     scale: int | None = None) -> str:
    """Build the type string a JDBC driver reports for a column.

    Drivers report the bare type name with size and scale in separate
    fields; the adapter sees them folded together.

    >>> compose_sql_type('BIGINT', 19)
    'BIGINT(19)'
    >>> compose_sql_type('DECIMAL', 65535, 32767)
    'DECIMAL(65535,32767)'
    >>> compose_sql_type('DATE')
    'DATE'
    """
    if '(' in type_name or size is None:
        return type_name
    if scale is not None and _NUMERIC_WITH_SCALE.match(type_name):
        return f'{type_name}({size},{scale})'
    return f'{type_name}({size})'


class Column:
    """Representation of a table column as seen through the dialect.

    Attributes:
        name: Column name as stored in the catalog
        sql_type: Reported type string, replaced by the canonical name
            once normalized
        limit: Byte size for numeric and binary types, length for strings
        precision: Numeric precision
        scale: Numeric scale
        type: Simplified abstract type ('integer', 'string', ...)
        default: Normalized default value
        raw_default: Default value exactly as the driver reported it
        null: Whether the column allows NULL values
    """

    def __init__(self,
                 name: str,
                 sql_type: str,
                 default: str | None = None,
                 null: bool | None = True,
                 limit: int | None = None,
                 precision: int | None = None,
                 scale: int | None = None,
                 type: str | None = None):
        self.name = name
        self.sql_type = sql_type
        self.raw_default = default
        self.default = default
        self.null = null
        self.limit = limit
        self.precision = precision
        self.scale = scale
        self.type = type

    @classmethod
    def from_metadata(cls, row: dict[str, Any]) -> Self:
        """Create an un-normalized Column from an INFORMATION_SCHEMA row.

        Expects lower-cased keys: column_name, type_name,
        character_maximum_length, numeric_precision, numeric_scale,
        column_default, is_nullable.
        """
        size = row.get('character_maximum_length') or row.get('numeric_precision')
        sql_type = compose_sql_type(str(row['type_name']), size, row.get('numeric_scale'))
        nullable = row.get('is_nullable')
        if isinstance(nullable, str):
            nullable = nullable.upper() in {'YES', 'Y', 'TRUE'}
        return cls(
            name=row['column_name'],
            sql_type=sql_type,
            default=row.get('column_default'),
            null=nullable,
        )

    def __repr__(self) -> str:
        return (f'Column(name={self.name!r}, sql_type={self.sql_type!r}, '
                f'type={self.type!r}, limit={self.limit!r})')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Column):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization.
        """
        return {
            'name': self.name,
            'sql_type': self.sql_type,
            'type': self.type,
            'limit': self.limit,
            'precision': self.precision,
            'scale': self.scale,
            'default': self.default,
            'null': self.null,
            }

    @staticmethod
    def get_names(columns: list[Self]) -> list[str]:
        """Get column names from a list of Column objects.
        """
        return [col.name for col in columns]

    @staticmethod
    def get_column_by_name(columns: list[Self], name: str) -> Self | None:
        """Find a column by name, ignoring case.
        """
        name = name.lower()
        for col in columns:
            if col.name.lower() == name:
                return col
        return None
