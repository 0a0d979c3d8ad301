"""
H2-specific strategy implementation.

H2 shares most of its quirks with HSQLDB, so this strategy holds an
:class:`HSQLDBStrategy` (``self.legacy``) and hands it everything it does not
handle itself. What H2 changes:
- Its JDBC driver reports types with bogus precision suffixes
  (``BIGINT(19)``, ``DECIMAL(65535,32767)``); they are mapped back to
  canonical names and byte limits
- Identity columns report ``(NEXT VALUE FOR ...)`` as their default
- Integer and float DDL types are chosen by byte size
- NOT NULL changes back-fill existing NULLs first
- EXPLAIN is supported
"""
import logging
import re
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from h2db.column import Column, match_type_rule, type_rules
from h2db.exceptions import AdapterError
from h2db.strategy.base import DatabaseStrategy, options_include_default
from h2db.strategy.base import register_strategy
from h2db.strategy.hsqldb import HSQLDBStrategy
from h2db.types import BINARY_LIMIT, coerce_type

if TYPE_CHECKING:
    from h2db.options import DialectOptions

logger = logging.getLogger(__name__)

_IDENTITY_DEFAULT = re.compile(r'^\(NEXT VALUE FOR', re.IGNORECASE)

# (pattern, abstract type); first match wins
_SIMPLIFIED_TYPES = (
    (re.compile(r'^bit|bool', re.IGNORECASE), 'boolean'),
    (re.compile(r'^signed|year', re.IGNORECASE), 'integer'),
    (re.compile(r'^real|double', re.IGNORECASE), 'float'),
    (re.compile(r'^varchar', re.IGNORECASE), 'string'),
    (re.compile(r'^binary|raw|bytea', re.IGNORECASE), 'binary'),
    (re.compile(r'^blob|image|oid', re.IGNORECASE), 'binary'),
)


@register_strategy('h2')
class H2Strategy(DatabaseStrategy):
    """H2-specific operations.
    """

    jdbc_driver = 'org.h2.Driver'

    NATIVE_DATABASE_TYPES = {
        'primary_key': 'bigint identity',
        'boolean': {'name': 'boolean'},
        'tinyint': {'name': 'tinyint', 'limit': 1},
        'smallint': {'name': 'smallint', 'limit': 2},
        'bigint': {'name': 'bigint', 'limit': 8},
        'integer': {'name': 'int', 'limit': 4},
        'decimal': {'name': 'decimal'},
        'float': {'name': 'float', 'limit': 8},
        'double': {'name': 'double', 'limit': 8},
        'real': {'name': 'real', 'limit': 4},
        'date': {'name': 'date'},
        'time': {'name': 'time'},
        'timestamp': {'name': 'timestamp'},
        'binary': {'name': 'binary'},
        'string': {'name': 'varchar', 'limit': 255},
        'char': {'name': 'char'},
        'blob': {'name': 'blob'},
        'text': {'name': 'clob'},
        'clob': {'name': 'clob'},
        'uuid': {'name': 'uuid'},
        'other': {'name': 'other'},
        'array': {'name': 'array'},
        'varchar_casesensitive': {'name': 'VARCHAR_CASESENSITIVE'},
        'varchar_ignorecase': {'name': 'VARCHAR_IGNORECASE'},
    }

    # The driver reports fixed-size types with a precision suffix
    TYPE_RULES = type_rules(
        (r'^tinyint', 'tinyint', 1),
        (r'^smallint|int2', 'smallint', 2),
        (r'^bigint|int8', 'bigint', 8),
        (r'^int|int4', 'int', 4),
        (r'^double', 'double', 8),
        (r'^real', 'real', 4),
        (r'^date', 'date', None),
        (r'^timestamp', 'timestamp', None),
        (r'^time', 'time', None),
        (r'^boolean', 'boolean', None),
        (r'^binary|bytea', 'binary', BINARY_LIMIT),
        (r'blob|image|oid', 'blob', None),
        (r'clob|text', 'clob', None),
        # unspecified precision and scale
        (r'^decimal\(65535,32767\)', 'decimal', None),
    )

    current_schema_function = 'SCHEMA()'
    current_schema_sql = 'CALL SCHEMA()'

    def __init__(self) -> None:
        self.legacy = HSQLDBStrategy()

    @property
    def dialect_name(self) -> str:
        """Return the dialect identifier for H2."""
        return 'h2'

    @property
    def adapter_name(self) -> str:
        return 'H2'

    def build_connection_url(self, options: 'DialectOptions') -> str:
        """Build the JDBC url for H2."""
        return f'jdbc:h2:{options.database}'

    @classmethod
    def get_required_options(cls) -> list[str]:
        """Return required options for H2 connections."""
        return ['database']

    # Types

    def type_to_sql(self, type_: Any, limit: int | None = None,
                    precision: int | None = None, scale: int | None = None) -> str:
        """Emit the H2 type, sizing integers, floats and binaries by limit.

        Raises
            AdapterError: No integer or float type has the requested byte size
        """
        spec = coerce_type(type_, limit, precision, scale)
        limit = spec.limit

        if spec.type == 'integer':
            if limit == 1:
                return 'tinyint'
            if limit == 2:
                return 'smallint'
            if limit in {None, 3, 4}:
                return 'int'
            if isinstance(limit, int) and 5 <= limit <= 8:
                return 'bigint'
            raise AdapterError(f'No integer type has byte size {limit}')

        if spec.type == 'float':
            if isinstance(limit, int) and 1 <= limit <= 4:
                return 'real'
            if isinstance(limit, int) and 5 <= limit <= 8:
                return 'double'
            raise AdapterError(f'No float type has byte size {limit}')

        if spec.type == 'binary':
            if limit is not None and limit < BINARY_LIMIT:
                return 'binary'
            return 'blob'

        return super().type_to_sql(spec.type, spec.limit, spec.precision, spec.scale)

    def extract_limit(self, sql_type: str) -> tuple[str, int | None]:
        """Map a reported type to its canonical name and byte limit.

        Unmatched types keep their lower-cased name and take the limit the
        HSQLDB rules give them.
        """
        rule = match_type_rule(self.TYPE_RULES, sql_type)
        if rule is None:
            _, limit = self.legacy.extract_limit(sql_type)
            return sql_type.lower(), limit
        return rule.sql_type, rule.limit

    def simplified_type(self, field_type: str) -> str | None:
        for pattern, abstract in _SIMPLIFIED_TYPES:
            if pattern.search(field_type):
                return abstract
        return self.legacy.simplified_type(field_type)

    def default_value(self, value: str | None) -> str | None:
        """Drop identity defaults and unquote string defaults.
        """
        if value is not None and _IDENTITY_DEFAULT.match(value):
            return None
        return self.legacy.default_value(value)

    # Quoting

    def quote(self, value: Any, column: Column | None = None) -> str:
        if isinstance(value, str) and not value:
            return "''"
        return self.legacy.quote(value, column)

    def quote_table_name(self, name: str) -> str:
        return self.legacy.quote_table_name(name)

    def quote_column_name(self, name: str) -> str:
        return self.legacy.quote_column_name(name)

    # Schema changes

    def change_column(self, cn: Any, table: str, column: str, type_: Any,
                      **options: Any) -> None:
        """Change a column's type, then its default and nullability.

        Each part is its own statement; a failure part way leaves the
        earlier changes in place.

        Args:
            cn: Database connection object
            table: Table name
            column: Column name
            type_: Abstract type symbol or SQLAlchemy type
            options: ``limit``, ``default`` and ``null``
        """
        sql_type = self.type_to_sql(type_, options.get('limit'),
                                    options.get('precision'), options.get('scale'))
        self._execute_ddl(cn, f'ALTER TABLE {self.quote_table_name(table)} '
                              f'ALTER COLUMN {self.quote_column_name(column)} {sql_type}', table)
        if options_include_default(options):
            self.change_column_default(cn, table, column, options['default'])
        if 'null' in options:
            self.change_column_null(cn, table, column, options['null'], options.get('default'))

    def change_column_null(self, cn: Any, table: str, column: str, null: bool,
                           default: Any = None) -> None:
        """Allow or forbid NULL in a column.

        When forbidding NULL with a default, existing NULL rows are set to
        the default first so the constraint can be added.
        """
        quoted_table = self.quote_table_name(table)
        quoted_column = self.quote_column_name(column)
        if not null and default is not None:
            self._execute_ddl(cn, f'UPDATE {quoted_table} SET {quoted_column}={self.quote(default)} '
                                  f'WHERE {quoted_column} IS NULL', table)
        if null:
            self._execute_ddl(cn, f'ALTER TABLE {quoted_table} ALTER COLUMN {quoted_column} SET NULL', table)
        else:
            self._execute_ddl(cn, f'ALTER TABLE {quoted_table} ALTER COLUMN {quoted_column} SET NOT NULL', table)

    def change_column_default(self, cn: Any, table: str, column: str,
                              default: Any) -> None:
        self.legacy.change_column_default(cn, table, column, default)

    def rename_column(self, cn: Any, table: str, column: str, new_name: str) -> None:
        self.legacy.rename_column(cn, table, column, new_name)

    def rename_table(self, cn: Any, table: str, new_name: str) -> None:
        self.legacy.rename_table(cn, table, new_name)

    def remove_index(self, cn: Any, table: str, index: str) -> None:
        self.legacy.remove_index(cn, table, index)

    def last_insert_id(self, cn: Any) -> int:
        return self.legacy.last_insert_id(cn)

    # Introspection

    def columns_sql(self) -> str:
        """Return the column listing query, parameters (table, schema).
        """
        return f"""
SELECT COLUMN_NAME, TYPE_NAME, CHARACTER_MAXIMUM_LENGTH,
NUMERIC_PRECISION, NUMERIC_SCALE, COLUMN_DEFAULT, IS_NULLABLE
FROM INFORMATION_SCHEMA.COLUMNS
WHERE UPPER(TABLE_NAME) = UPPER(?)
AND {self._schema_filter('TABLE_SCHEMA')}
ORDER BY ORDINAL_POSITION
"""

    # EXPLAIN

    def supports_explain(self) -> bool:
        return True

    def explain(self, cn: Any, sql: Any, params: tuple | None = None) -> str:
        """Return the query plan for a statement.

        Args:
            cn: Database connection object
            sql: SQL text or a SQLAlchemy statement, compiled with its
                parameters inlined
            params: Parameters for SQL text

        Returns
            str: The plan row's values joined by newlines
        """
        if isinstance(sql, sa.sql.ClauseElement):
            sql = str(sql.compile(compile_kwargs={'literal_binds': True}))
        explain_sql = f'EXPLAIN {sql}'
        logger.debug(f'{self.adapter_name}: {explain_sql}')
        row = self._select_first_row(cn, explain_sql, params)
        return '\n'.join(str(value) for value in row)
