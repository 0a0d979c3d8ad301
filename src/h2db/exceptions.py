"""
Dialect adapter exception classes.
"""


class DatabaseError(Exception):
    """Base class for all h2db errors.
    """


class AdapterError(DatabaseError):
    """Error in adapter configuration, such as an unsupported type size.

    Raised while generating DDL; the statement is never attempted.
    """


class QueryError(DatabaseError):
    """Error in query syntax or execution.
    """


class ValidationError(DatabaseError, ValueError):
    """Error in input validation, such as a missing required option.
    """


class NotSupportedError(DatabaseError):
    """Operation the dialect does not provide, such as EXPLAIN on HSQLDB.
    """
