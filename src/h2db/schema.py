"""
Schema operations dispatched to the connection's dialect strategy.

Each function looks up the strategy for ``cn`` (from ``cn.dialect``,
``cn.options.drivername`` or the connection's JDBC url) and delegates to it.

Functions in this module handle:
- Schema information retrieval (tables, columns, primary keys, current schema)
- Column changes (type, default, nullability, rename)
- Table renames and index removal
- Query plans

Primary key listings support caching with a bypass_cache parameter for
when fresh information is required; table and column listings are always
read fresh.
"""
import logging
from typing import Any

from h2db.column import Column
from h2db.strategy import get_db_strategy

logger = logging.getLogger(__name__)


def get_tables(cn: Any) -> list[str]:
    """List tables in the connection's configured schema.
    """
    return get_db_strategy(cn).tables(cn)


def get_columns(cn: Any, table: str) -> list[Column]:
    """Read the normalized columns of a table.
    """
    return get_db_strategy(cn).columns(cn, table)


def get_primary_keys(cn: Any, table: str, bypass_cache: bool = False) -> list[str]:
    """Get primary key columns for a table.
    """
    return get_db_strategy(cn).primary_keys(cn, table, bypass_cache=bypass_cache)


def current_schema(cn: Any) -> str:
    """Return the connection's current schema.
    """
    return get_db_strategy(cn).current_schema(cn)


def change_column(cn: Any, table: str, column: str, type_: Any, **options: Any) -> None:
    """Change a column's type and, when given, its default and nullability.

    Options: ``limit``, ``precision``, ``scale``, ``default``, ``null``.
    """
    get_db_strategy(cn).change_column(cn, table, column, type_, **options)


def change_column_default(cn: Any, table: str, column: str, default: Any) -> None:
    get_db_strategy(cn).change_column_default(cn, table, column, default)


def change_column_null(cn: Any, table: str, column: str, null: bool,
                       default: Any = None) -> None:
    """Allow or forbid NULL in a column, back-filling NULLs with ``default``.
    """
    get_db_strategy(cn).change_column_null(cn, table, column, null, default)


def rename_column(cn: Any, table: str, column: str, new_name: str) -> None:
    get_db_strategy(cn).rename_column(cn, table, column, new_name)


def rename_table(cn: Any, table: str, new_name: str) -> None:
    get_db_strategy(cn).rename_table(cn, table, new_name)


def remove_index(cn: Any, table: str, index: str) -> None:
    get_db_strategy(cn).remove_index(cn, table, index)


def explain(cn: Any, sql: Any, params: tuple | None = None) -> str:
    """Return the database's query plan for ``sql``.

    Raises NotSupportedError when the dialect has no EXPLAIN support.
    """
    return get_db_strategy(cn).explain(cn, sql, params)
