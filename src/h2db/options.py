from dataclasses import dataclass

from h2db.exceptions import ValidationError
from h2db.strategy import get_available_dialects, get_strategy_class
from h2db.strategy import is_supported_dialect

from libb import ConfigOptions, scriptname

__all__ = [
    'DialectOptions',
]


@dataclass
class DialectOptions(ConfigOptions):
    """Options

    supported driver names: `h2`, `hsqldb`

    - database: database part of the JDBC url, e.g. `mem:test` or `~/data/app`
    - schema: schema that table and column listings are scoped to; empty
      means the connection's current schema
    """
    drivername: str = 'h2'
    database: str = None
    username: str = None
    password: str = None
    schema: str = None
    appname: str = None

    def __post_init__(self):
        if not is_supported_dialect(self.drivername):
            available = get_available_dialects()
            raise ValidationError(f'drivername must be one of: {available}')
        self.appname = self.appname or scriptname() or 'python_console'
        strategy_cls = get_strategy_class(self.drivername)
        strategy_cls.validate_options(self)

    @property
    def url(self) -> str:
        """JDBC url for these options."""
        return get_strategy_class(self.drivername)().build_connection_url(self)

    @property
    def jdbc_driver(self) -> str:
        """JDBC driver class name for these options."""
        return get_strategy_class(self.drivername).jdbc_driver
