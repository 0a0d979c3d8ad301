"""
Base strategy interface for dialect adapters.

Defines the base class that every dialect strategy inherits from. A strategy
translates the abstraction layer's requests into one database's SQL:

- DDL type emission from abstract type symbols (``type_to_sql``)
- Normalization of driver-reported column metadata (``normalize_column``)
- Literal and identifier quoting
- Schema-scoped introspection through INFORMATION_SCHEMA

The implementations here are the generic defaults. Concrete strategies
override the parts their database handles differently.
"""
import copy
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from h2db.cache import Cache, cacheable_strategy
from h2db.column import Column
from h2db.exceptions import AdapterError, NotSupportedError, QueryError
from h2db.exceptions import ValidationError
from h2db.sql import quote_identifier as sql_quote_identifier
from h2db.sql import quote_literal
from h2db.types import coerce_type
from h2db.utils import get_raw_connection

from libb import attrdict

if TYPE_CHECKING:
    from h2db.options import DialectOptions

logger = logging.getLogger(__name__)

# Registry of dialect name -> strategy class
# Defined here to avoid circular imports (concrete strategies import from base)
_STRATEGY_REGISTRY: dict[str, type['DatabaseStrategy']] = {}


def register_strategy(dialect: str):
    """Decorator to register a strategy class for a dialect.

    Usage:
        @register_strategy('h2')
        class H2Strategy(DatabaseStrategy):
            ...
    """
    def decorator(cls: type['DatabaseStrategy']) -> type['DatabaseStrategy']:
        _STRATEGY_REGISTRY[dialect] = cls
        return cls
    return decorator


def options_include_default(options: Mapping[str, Any]) -> bool:
    """Check whether column options ask for a default to be set.

    A ``default`` of None together with ``null=False`` only describes the
    NOT NULL back-fill, not a default.
    """
    return 'default' in options and not (
        options.get('null') is False and options.get('default') is None)


_LIMIT = re.compile(r'\((\d+)')
_PRECISION = re.compile(r'^(?:numeric|decimal|number|dec)\((\d+)(?:,\s*\d+)?\)', re.IGNORECASE)
_SCALE_ZERO = re.compile(r'^(?:numeric|decimal|number|dec)\((\d+)\)', re.IGNORECASE)
_SCALE = re.compile(r'\((\d+)\s*,\s*(\d+)\)')

# (pattern, abstract type); first match wins
_GENERIC_SIMPLIFIED_TYPES = (
    (re.compile(r'int', re.IGNORECASE), 'integer'),
    (re.compile(r'float|double', re.IGNORECASE), 'float'),
    (re.compile(r'decimal|numeric|number', re.IGNORECASE), 'decimal'),
    (re.compile(r'datetime', re.IGNORECASE), 'datetime'),
    (re.compile(r'timestamp', re.IGNORECASE), 'timestamp'),
    (re.compile(r'time', re.IGNORECASE), 'time'),
    (re.compile(r'date', re.IGNORECASE), 'date'),
    (re.compile(r'clob|text', re.IGNORECASE), 'text'),
    (re.compile(r'blob|binary', re.IGNORECASE), 'binary'),
    (re.compile(r'char|string', re.IGNORECASE), 'string'),
    (re.compile(r'boolean', re.IGNORECASE), 'boolean'),
)


class DatabaseStrategy(ABC):
    """Base class for dialect-specific operations.
    """

    #: JDBC driver class name
    jdbc_driver: str | None = None

    #: Abstract type symbol -> {'name': native name, 'limit': default size}
    NATIVE_DATABASE_TYPES: dict[str, Any] = {
        'primary_key': 'integer primary key',
        'string': {'name': 'varchar', 'limit': 255},
        'text': {'name': 'clob'},
        'integer': {'name': 'integer'},
        'float': {'name': 'float'},
        'decimal': {'name': 'decimal'},
        'datetime': {'name': 'timestamp'},
        'timestamp': {'name': 'timestamp'},
        'time': {'name': 'time'},
        'date': {'name': 'date'},
        'binary': {'name': 'blob'},
        'boolean': {'name': 'boolean'},
    }

    #: Types whose limit is a byte width, never rendered as a size suffix
    BYTE_SIZED_TYPES = frozenset({
        'tinyint', 'smallint', 'integer', 'bigint', 'float', 'double', 'real',
    })

    #: SQL expression yielding the connection's current schema
    current_schema_function = 'CURRENT_SCHEMA'

    #: Statement returning the current schema as its first value
    current_schema_sql = 'VALUES CURRENT_SCHEMA'

    @contextmanager
    def _cursor(self, cn: Any, sql: str, params: tuple | None = None):
        """Context manager for cursor lifecycle.

        Handles cursor creation, SQL execution, and cleanup.
        """
        cursor = get_raw_connection(cn).cursor()
        try:
            cursor.execute(sql, params or ())
            yield cursor
        finally:
            cursor.close()

    def _execute_raw(self, cn: Any, sql: str, params: tuple | None = None) -> int:
        """Execute SQL and return rowcount.

        Used internally by strategy methods for DDL/DML operations.
        """
        with self._cursor(cn, sql, params) as cursor:
            return cursor.rowcount

    def _select_raw(self, cn: Any, sql: str, params: tuple | None = None) -> list[attrdict]:
        """Execute SQL and return rows keyed by lower-cased column name.
        """
        with self._cursor(cn, sql, params) as cursor:
            if cursor.description is None:
                return []
            columns = [desc[0].lower() for desc in cursor.description]
            return [attrdict(zip(columns, row)) for row in cursor.fetchall()]

    def _select_column_raw(self, cn: Any, sql: str, params: tuple | None = None) -> list:
        """Execute SQL and return first column as list.
        """
        with self._cursor(cn, sql, params) as cursor:
            return [row[0] for row in cursor.fetchall()]

    def _select_first_row(self, cn: Any, sql: str, params: tuple | None = None) -> tuple:
        """Execute SQL and return its first row.

        Raises
            QueryError: The statement returned no rows
        """
        with self._cursor(cn, sql, params) as cursor:
            row = cursor.fetchone()
        if row is None:
            raise QueryError(f'No rows returned by: {sql}')
        return tuple(row)

    def _execute_ddl(self, cn: Any, sql: str, table: str) -> None:
        """Execute one DDL/DML statement that changes ``table``.

        Cached metadata for the table is dropped afterwards.
        """
        logger.debug(f'{self.adapter_name}: {sql}')
        self._execute_raw(cn, sql)
        Cache.get_instance().clear_for_table(table)

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the dialect identifier (e.g., 'h2', 'hsqldb')."""

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the adapter's display name (e.g., 'H2')."""

    @abstractmethod
    def build_connection_url(self, options: 'DialectOptions') -> str:
        """Build the JDBC connection url for this dialect.

        Args:
            options: DialectOptions containing connection parameters

        Returns
            JDBC url string
        """

    @classmethod
    @abstractmethod
    def get_required_options(cls) -> list[str]:
        """Return list of required option field names for this dialect.

        Returns
            List of field names that must have non-None/non-zero values
        """

    @classmethod
    def validate_options(cls, options: 'DialectOptions') -> None:
        """Validate options for this dialect.

        Args:
            options: DialectOptions to validate

        Raises
            ValidationError: If any required field is None or 0
        """
        for field in cls.get_required_options():
            if not getattr(options, field):
                raise ValidationError(f'field {field} cannot be None or 0')

    def get_placeholder_style(self) -> str:
        """Return the placeholder marker (JDBC drivers use qmark).
        """
        return '?'

    # Types

    def native_database_types(self) -> dict[str, Any]:
        """Return a copy of the native type table.
        """
        return copy.deepcopy(self.NATIVE_DATABASE_TYPES)

    def type_to_sql(self, type_: Any, limit: int | None = None,
                    precision: int | None = None, scale: int | None = None) -> str:
        """Emit the native SQL type for an abstract type.

        Unknown symbols are returned unchanged. Decimals take precision and
        scale; length-bearing types take ``limit`` or the table default.

        Raises
            AdapterError: A decimal scale was given without a precision
        """
        spec = coerce_type(type_, limit, precision, scale)
        native = self.NATIVE_DATABASE_TYPES.get(spec.type)
        if native is None:
            return spec.type
        if isinstance(native, str):
            return native

        name = native['name']
        if spec.type in {'decimal', 'numeric'}:
            if spec.precision is not None:
                if spec.scale is not None:
                    return f'{name}({spec.precision},{spec.scale})'
                return f'{name}({spec.precision})'
            if spec.scale is not None:
                raise AdapterError('Error adding decimal column: precision cannot '
                                   'be empty if scale is specified')
            return name

        if spec.type in self.BYTE_SIZED_TYPES:
            return name

        size = spec.limit if spec.limit is not None else native.get('limit')
        if size is not None:
            return f'{name}({size})'
        return name

    def extract_limit(self, sql_type: str) -> tuple[str, int | None]:
        """Return the canonical type name and limit for a reported type.

        The generic rule lower-cases the type and reads the first number in
        parentheses.
        """
        match = _LIMIT.search(sql_type)
        return sql_type.lower(), int(match.group(1)) if match else None

    def extract_precision(self, sql_type: str) -> int | None:
        match = _PRECISION.match(sql_type)
        return int(match.group(1)) if match else None

    def extract_scale(self, sql_type: str) -> int | None:
        if _SCALE_ZERO.match(sql_type):
            return 0
        match = _SCALE.search(sql_type)
        return int(match.group(2)) if match else None

    def simplified_type(self, field_type: str) -> str | None:
        """Classify a native type into an abstract type.
        """
        for pattern, abstract in _GENERIC_SIMPLIFIED_TYPES:
            if pattern.search(field_type):
                if abstract == 'decimal' and self.extract_scale(field_type) == 0:
                    return 'integer'
                return abstract
        return None

    def default_value(self, value: str | None) -> str | None:
        """Post-process a reported column default.
        """
        return value

    def normalize_column(self, column: Column) -> Column:
        """Apply this dialect's metadata rules to a column, in place.

        Running it again on the same column gives the same result.
        """
        sql_type, limit = self.extract_limit(column.sql_type)
        column.sql_type = sql_type
        column.limit = limit
        column.precision = self.extract_precision(sql_type)
        column.scale = self.extract_scale(sql_type)
        column.type = self.simplified_type(sql_type)
        column.default = self.default_value(column.raw_default)
        return column

    # Quoting

    def quote(self, value: Any, column: Column | None = None) -> str:
        """Render a value as a SQL literal.
        """
        return quote_literal(value)

    def quote_identifier(self, identifier: str) -> str:
        """Quote a database identifier with standard SQL double quotes.
        """
        return sql_quote_identifier(identifier)

    def quote_table_name(self, name: str) -> str:
        return self.quote_identifier(name)

    def quote_column_name(self, name: str) -> str:
        return self.quote_identifier(name)

    # Introspection

    def schema_name(self, cn: Any) -> str:
        """Return the configured schema for a connection, '' when unset.
        """
        options = getattr(cn, 'options', None)
        if isinstance(options, Mapping):
            schema = options.get('schema')
        else:
            schema = getattr(options, 'schema', None)
        return schema or ''

    def _schema_filter(self, column: str) -> str:
        return f"{column} = COALESCE(NULLIF(?, ''), {self.current_schema_function})"

    def tables(self, cn: Any) -> list[str]:
        """List base tables in the configured schema.

        Not cached: tables created outside the adapter show up on the next
        call.

        Args:
            cn: Database connection object

        Returns
            list: Table names
        """
        sql = f"""
SELECT TABLE_NAME FROM INFORMATION_SCHEMA.TABLES
WHERE {self._schema_filter('TABLE_SCHEMA')}
AND TABLE_TYPE IN ('TABLE', 'BASE TABLE')
ORDER BY TABLE_NAME
"""
        return self._select_column_raw(cn, sql, (self.schema_name(cn),))

    def columns_sql(self) -> str:
        """Return the column listing query, parameters (table, schema).
        """
        return f"""
SELECT COLUMN_NAME, DATA_TYPE AS TYPE_NAME, CHARACTER_MAXIMUM_LENGTH,
NUMERIC_PRECISION, NUMERIC_SCALE, COLUMN_DEFAULT, IS_NULLABLE
FROM INFORMATION_SCHEMA.COLUMNS
WHERE UPPER(TABLE_NAME) = UPPER(?)
AND {self._schema_filter('TABLE_SCHEMA')}
ORDER BY ORDINAL_POSITION
"""

    def columns(self, cn: Any, table: str) -> list[Column]:
        """Read and normalize the columns of a table in the configured schema.

        Not cached: every call rebuilds the columns from the catalog.

        Args:
            cn: Database connection object
            table: Table name

        Returns
            list: Normalized Column objects ordered by position
        """
        rows = self._select_raw(cn, self.columns_sql(), (str(table), self.schema_name(cn)))
        return [self.normalize_column(Column.from_metadata(row)) for row in rows]

    @cacheable_strategy('primary_keys', ttl=300, maxsize=50)
    def primary_keys(self, cn: Any, table: str, bypass_cache: bool = False) -> list[str]:
        """Get primary key columns for a table.

        Args:
            cn: Database connection object
            table: Table name to get primary keys for
            bypass_cache: If True, bypass cache and query database directly

        Returns
            list: Primary key column names in key order
        """
        sql = f"""
SELECT KCU.COLUMN_NAME
FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS TC
JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE KCU
ON TC.CONSTRAINT_NAME = KCU.CONSTRAINT_NAME AND TC.TABLE_SCHEMA = KCU.TABLE_SCHEMA
WHERE TC.CONSTRAINT_TYPE = 'PRIMARY KEY'
AND UPPER(TC.TABLE_NAME) = UPPER(?)
AND {self._schema_filter('TC.TABLE_SCHEMA')}
ORDER BY KCU.ORDINAL_POSITION
"""
        return self._select_column_raw(cn, sql, (str(table), self.schema_name(cn)))

    def current_schema(self, cn: Any) -> str:
        """Return the connection's current schema.
        """
        return self._select_first_row(cn, self.current_schema_sql)[0]

    # EXPLAIN

    def supports_explain(self) -> bool:
        return False

    def explain(self, cn: Any, sql: Any, params: tuple | None = None) -> str:
        """Return the query plan for a statement.

        Raises
            NotSupportedError: The dialect has no EXPLAIN support
        """
        raise NotSupportedError(f'EXPLAIN is not supported by {self.adapter_name}')
