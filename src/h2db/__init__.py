"""
Dialect adapter for the H2 embedded database, built on HSQLDB rules.

Strategies translate abstract column types to native SQL, normalize the
metadata the JDBC driver reports, and issue the dialect's ALTER, EXPLAIN and
quoting variants. Use them directly:

    strategy = h2db.get_strategy('h2')
    strategy.type_to_sql('integer', 8)  # 'bigint'

or through the schema functions, which pick the strategy from the
connection.
"""
__version__ = '0.1.0'

from h2db.column import Column
from h2db.exceptions import AdapterError, DatabaseError, QueryError
from h2db.exceptions import NotSupportedError, ValidationError
from h2db.options import DialectOptions
from h2db.schema import change_column, change_column_default, change_column_null
from h2db.schema import current_schema, explain, get_columns, get_primary_keys
from h2db.schema import get_tables, remove_index, rename_column, rename_table
from h2db.strategy import DatabaseStrategy, H2Strategy, HSQLDBStrategy
from h2db.strategy import get_db_strategy, get_strategy
from h2db.types import TypeSpec, coerce_type
