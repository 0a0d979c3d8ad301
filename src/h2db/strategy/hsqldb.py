"""
HSQLDB-specific strategy implementation.

HSQLDB is the older of the two embedded Java databases and the H2 strategy
builds on the rules here. It handles:
- Type strings reported with spurious precision suffixes
- Lack of implicit string-to-number conversion when quoting
- ALTER TABLE ... ALTER COLUMN syntax for defaults and renames
- Identity retrieval through CALL IDENTITY()
"""
import logging
import re
from typing import TYPE_CHECKING, Any

from h2db.column import Column, match_type_rule, type_rules
from h2db.sql import quote_binary, quote_literal
from h2db.strategy.base import DatabaseStrategy, register_strategy

if TYPE_CHECKING:
    from h2db.options import DialectOptions

logger = logging.getLogger(__name__)

_PLAIN_NAME = re.compile(r'^[A-Za-z_][A-Za-z0-9_.]*$')
_INTEGER_PREFIX = re.compile(r'^\s*[-+]?\d+')
_FLOAT_PREFIX = re.compile(r'^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?')
_QUOTED_DEFAULT = re.compile(r"^'(.*)'$", re.DOTALL)


def _leading_number(value: str, pattern: re.Pattern, cast: type) -> int | float:
    """Read the numeric prefix of a string, 0 when there is none.
    """
    match = pattern.match(value)
    return cast(match.group(0)) if match else cast(0)


@register_strategy('hsqldb')
class HSQLDBStrategy(DatabaseStrategy):
    """HSQLDB-specific operations.
    """

    jdbc_driver = 'org.hsqldb.jdbcDriver'

    NATIVE_DATABASE_TYPES = {
        'primary_key': 'integer GENERATED BY DEFAULT AS IDENTITY(START WITH 0) PRIMARY KEY',
        'string': {'name': 'varchar', 'limit': 255},
        'text': {'name': 'longvarchar'},
        'integer': {'name': 'integer'},
        'float': {'name': 'float'},
        'decimal': {'name': 'decimal'},
        'datetime': {'name': 'timestamp'},
        'timestamp': {'name': 'timestamp'},
        'time': {'name': 'time'},
        'date': {'name': 'date'},
        'binary': {'name': 'longvarbinary'},
        'boolean': {'name': 'boolean'},
    }

    TYPE_RULES = type_rules(
        (r'^tinyint', 'tinyint', 1),
        (r'^smallint', 'smallint', 2),
        (r'^bigint', 'bigint', 8),
        (r'^int', 'integer', 4),
        (r'^double|^float', 'double', 8),
        # REAL is a synonym for DOUBLE in HSQLDB
        (r'^real', 'real', 8),
        (r'^boolean|^bit', 'boolean', None),
        (r'^longvarchar', 'longvarchar', None),
        (r'^longvarbinary', 'longvarbinary', None),
    )

    SIMPLIFIED_TYPES = (
        (re.compile(r'^nvarchar', re.IGNORECASE), 'string'),
        (re.compile(r'^character', re.IGNORECASE), 'string'),
        (re.compile(r'^longvarchar', re.IGNORECASE), 'text'),
        (re.compile(r'^longvarbinary', re.IGNORECASE), 'binary'),
        (re.compile(r'^(tinyint|smallint|bigint|integer|int)\b', re.IGNORECASE), 'integer'),
        (re.compile(r'^(real|double|float)', re.IGNORECASE), 'float'),
        (re.compile(r'^timestamp', re.IGNORECASE), 'datetime'),
        (re.compile(r'^char', re.IGNORECASE), 'string'),
    )

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for HSQLDB."""
        return 'hsqldb'

    @property
    def adapter_name(self) -> str:
        return 'HSQLDB'

    def build_connection_url(self, options: 'DialectOptions') -> str:
        """Build the JDBC url for HSQLDB."""
        return f'jdbc:hsqldb:{options.database}'

    @classmethod
    def get_required_options(cls) -> list[str]:
        """Return required options for HSQLDB connections."""
        return ['database']

    def extract_limit(self, sql_type: str) -> tuple[str, int | None]:
        """Strip the precision the driver appends to fixed-size types.
        """
        rule = match_type_rule(self.TYPE_RULES, sql_type)
        if rule is None:
            return super().extract_limit(sql_type)
        return rule.sql_type, rule.limit

    def simplified_type(self, field_type: str) -> str | None:
        for pattern, abstract in self.SIMPLIFIED_TYPES:
            if pattern.search(field_type):
                return abstract
        return super().simplified_type(field_type)

    def default_value(self, value: str | None) -> str | None:
        """Strip the single quotes the driver leaves around string defaults.
        """
        if value is None:
            return None
        match = _QUOTED_DEFAULT.match(value)
        if match:
            return match.group(1)
        return value

    def quote(self, value: Any, column: Column | None = None) -> str:
        """Quote strings according to the column they are bound for.

        HSQLDB does not convert strings to numbers implicitly, so a string
        bound for a numeric column is rendered as a number.
        """
        if isinstance(value, str) and column is not None:
            if column.type == 'binary':
                return quote_binary(value)
            if column.type == 'integer':
                return str(_leading_number(value, _INTEGER_PREFIX, int))
            if column.type == 'float':
                return repr(_leading_number(value, _FLOAT_PREFIX, float))
        return quote_literal(value)

    def quote_column_name(self, name: str) -> str:
        """Leave plain names bare so the database folds them to upper case.
        """
        name = str(name)
        if _PLAIN_NAME.match(name):
            return name
        return self.quote_identifier(name.upper())

    def quote_table_name(self, name: str) -> str:
        return self.quote_column_name(name)

    def change_column(self, cn: Any, table: str, column: str, type_: Any,
                      **options: Any) -> None:
        """Change the type of a column.
        """
        sql_type = self.type_to_sql(type_, options.get('limit'),
                                    options.get('precision'), options.get('scale'))
        self._execute_ddl(cn, f'ALTER TABLE {self.quote_table_name(table)} '
                              f'ALTER COLUMN {self.quote_column_name(column)} {sql_type}', table)

    def change_column_default(self, cn: Any, table: str, column: str,
                              default: Any) -> None:
        """Set the default of a column; None sets DEFAULT NULL.
        """
        self._execute_ddl(cn, f'ALTER TABLE {self.quote_table_name(table)} '
                              f'ALTER COLUMN {self.quote_column_name(column)} '
                              f'SET DEFAULT {self.quote(default)}', table)

    def rename_column(self, cn: Any, table: str, column: str, new_name: str) -> None:
        """Rename a column.
        """
        self._execute_ddl(cn, f'ALTER TABLE {self.quote_table_name(table)} '
                              f'ALTER COLUMN {self.quote_column_name(column)} '
                              f'RENAME TO {self.quote_column_name(new_name)}', table)

    def rename_table(self, cn: Any, table: str, new_name: str) -> None:
        """Rename a table.
        """
        self._execute_ddl(cn, f'ALTER TABLE {self.quote_table_name(table)} '
                              f'RENAME TO {self.quote_table_name(new_name)}', table)

    def remove_index(self, cn: Any, table: str, index: str) -> None:
        """Drop an index; index names are schema-wide.
        """
        self._execute_ddl(cn, f'DROP INDEX {self.quote_column_name(index)}', table)

    def last_insert_id(self, cn: Any) -> int:
        """Return the identity value generated by the last insert.
        """
        return self._select_first_row(cn, 'CALL IDENTITY()')[0]
