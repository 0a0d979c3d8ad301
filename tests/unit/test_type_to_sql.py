"""
Tests for DDL type emission.
"""
import pytest
import sqlalchemy as sa
from h2db.exceptions import AdapterError
from h2db.strategy import H2Strategy, HSQLDBStrategy
from h2db.types import BINARY_LIMIT


@pytest.fixture
def h2():
    return H2Strategy()


@pytest.mark.parametrize(('limit', 'expected'), [
    (1, 'tinyint'),
    (2, 'smallint'),
    (None, 'int'),
    (3, 'int'),
    (4, 'int'),
    (5, 'bigint'),
    (8, 'bigint'),
])
def test_integer_by_byte_size(h2, limit, expected):
    assert h2.type_to_sql('integer', limit) == expected


@pytest.mark.parametrize('limit', [0, 9, 16])
def test_integer_out_of_range(h2, limit):
    with pytest.raises(AdapterError, match=f'No integer type has byte size {limit}'):
        h2.type_to_sql('integer', limit)


@pytest.mark.parametrize(('limit', 'expected'), [
    (1, 'real'), (2, 'real'), (3, 'real'), (4, 'real'),
    (5, 'double'), (6, 'double'), (7, 'double'), (8, 'double'),
])
def test_float_by_byte_size(h2, limit, expected):
    assert h2.type_to_sql('float', limit) == expected


@pytest.mark.parametrize('limit', [None, 0, 9])
def test_float_out_of_range(h2, limit):
    with pytest.raises(AdapterError, match=f'No float type has byte size {limit}'):
        h2.type_to_sql('float', limit)


def test_binary_switches_to_blob_at_two_megabytes(h2):
    assert BINARY_LIMIT == 2 * 1024 * 1024
    assert h2.type_to_sql('binary', BINARY_LIMIT - 1) == 'binary'
    assert h2.type_to_sql('binary', BINARY_LIMIT) == 'blob'
    assert h2.type_to_sql('binary', BINARY_LIMIT + 1) == 'blob'
    assert h2.type_to_sql('binary') == 'blob'


def test_symbols_are_case_insensitive(h2):
    assert h2.type_to_sql('INTEGER', 2) == 'smallint'


def test_other_types_use_native_table(h2):
    assert h2.type_to_sql('string') == 'varchar(255)'
    assert h2.type_to_sql('string', 40) == 'varchar(40)'
    assert h2.type_to_sql('text') == 'clob'
    assert h2.type_to_sql('boolean') == 'boolean'
    assert h2.type_to_sql('bigint') == 'bigint'
    assert h2.type_to_sql('double') == 'double'
    assert h2.type_to_sql('uuid') == 'uuid'
    assert h2.type_to_sql('varchar_ignorecase') == 'VARCHAR_IGNORECASE'
    assert h2.type_to_sql('primary_key') == 'bigint identity'


def test_decimal_precision_and_scale(h2):
    assert h2.type_to_sql('decimal') == 'decimal'
    assert h2.type_to_sql('decimal', precision=10) == 'decimal(10)'
    assert h2.type_to_sql('decimal', precision=10, scale=2) == 'decimal(10,2)'
    with pytest.raises(AdapterError, match='precision cannot be empty'):
        h2.type_to_sql('decimal', scale=2)


def test_unknown_symbol_passes_through(h2):
    assert h2.type_to_sql('geometry') == 'geometry'


def test_sqlalchemy_types(h2):
    assert h2.type_to_sql(sa.Integer) == 'int'
    assert h2.type_to_sql(sa.BigInteger) == 'bigint'
    assert h2.type_to_sql(sa.SmallInteger()) == 'smallint'
    assert h2.type_to_sql(sa.Float) == 'double'
    assert h2.type_to_sql(sa.String(40)) == 'varchar(40)'
    assert h2.type_to_sql(sa.Text) == 'clob'
    assert h2.type_to_sql(sa.Numeric(12, 4)) == 'decimal(12,4)'
    assert h2.type_to_sql(sa.LargeBinary(1024)) == 'binary'
    assert h2.type_to_sql(sa.LargeBinary) == 'blob'
    assert h2.type_to_sql(sa.DateTime) == 'timestamp'


def test_explicit_limit_overrides_sqlalchemy_length(h2):
    assert h2.type_to_sql(sa.String(40), 80) == 'varchar(80)'


def test_native_types_are_copied(h2):
    types = h2.native_database_types()
    types['integer']['name'] = 'changed'
    del types['string']
    assert h2.native_database_types()['integer'] == {'name': 'int', 'limit': 4}
    assert 'string' in h2.native_database_types()


def test_hsqldb_generic_emission():
    hsqldb = HSQLDBStrategy()
    assert hsqldb.type_to_sql('integer', 8) == 'integer'
    assert hsqldb.type_to_sql('text') == 'longvarchar'
    assert hsqldb.type_to_sql('binary') == 'longvarbinary'
    assert hsqldb.type_to_sql('datetime') == 'timestamp'
    assert hsqldb.type_to_sql('string', 10) == 'varchar(10)'
