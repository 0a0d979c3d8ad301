"""Low-level connection utilities with no internal dependencies.

These utilities work with any connection type (wrappers exposing
``dbapi_connection``, JDBC bridge connections, plain DB-API connections) and
have no imports from other h2db modules, making them safe to import without
circular dependency concerns.
"""
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_JDBC_URL = re.compile(r'^jdbc:(?P<dialect>h2|hsqldb):', re.IGNORECASE)


def dialect_from_jdbc_url(url: str | None) -> str | None:
    """Return 'h2' or 'hsqldb' for a JDBC url, None otherwise.

    >>> dialect_from_jdbc_url('jdbc:h2:mem:test')
    'h2'
    >>> dialect_from_jdbc_url('jdbc:HSQLDB:file:db/test')
    'hsqldb'
    >>> dialect_from_jdbc_url('postgresql://localhost') is None
    True
    """
    if not url:
        return None
    match = _JDBC_URL.match(url)
    if match:
        return match.group('dialect').lower()
    return None


def get_dialect_name(obj: Any) -> str:
    """Get dialect name for a database connection.
    """
    if hasattr(obj, 'dialect'):
        dialect = obj.dialect
        if isinstance(dialect, str):
            return dialect.lower()
        return str(dialect.name).lower()

    options = getattr(obj, 'options', None)
    if getattr(options, 'drivername', None):
        return str(options.drivername).lower()

    if hasattr(obj, 'jconn'):
        url = str(obj.jconn.getMetaData().getURL())
        dialect = dialect_from_jdbc_url(url)
        if dialect:
            return dialect

    if hasattr(obj, 'dbapi_connection'):
        return get_dialect_name(obj.dbapi_connection)

    raise AttributeError(f'Cannot determine dialect for {type(obj)}')


def get_raw_connection(connection: Any) -> Any:
    """Extract the raw DBAPI connection from a wrapper."""
    raw_conn = connection
    if getattr(connection, 'dbapi_connection', None) is not None:
        raw_conn = connection.dbapi_connection
    elif getattr(connection, 'driver_connection', None) is not None:
        raw_conn = connection.driver_connection
    return raw_conn
