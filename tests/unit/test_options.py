import pytest
from h2db.exceptions import ValidationError
from h2db.options import DialectOptions


def test_init_defaults():
    """Test default initialization"""
    options = DialectOptions(database='mem:test')

    assert options.drivername == 'h2'
    assert options.appname is not None
    assert options.schema is None
    assert options.url == 'jdbc:h2:mem:test'
    assert options.jdbc_driver == 'org.h2.Driver'


def test_hsqldb_options():
    """Test HSQLDB options"""
    options = DialectOptions(drivername='hsqldb', database='file:db/test', schema='APP')
    assert options.url == 'jdbc:hsqldb:file:db/test'
    assert options.jdbc_driver == 'org.hsqldb.jdbcDriver'
    assert options.schema == 'APP'


def test_explicit_appname_kept():
    options = DialectOptions(database='mem:test', appname='reports')
    assert options.appname == 'reports'


def test_validation():
    """Test validation rules"""
    with pytest.raises(ValueError, match='drivername must be one of'):
        DialectOptions(drivername='postgresql', database='testdb')

    with pytest.raises(ValidationError, match='field database'):
        DialectOptions(drivername='h2')

    with pytest.raises(ValueError):
        DialectOptions(drivername='hsqldb', database='')


if __name__ == '__main__':
    pytest.main([__file__])
