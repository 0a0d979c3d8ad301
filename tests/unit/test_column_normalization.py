"""
Tests for normalization of driver-reported column metadata.
"""
import pytest
from h2db.column import Column, compose_sql_type
from h2db.strategy import H2Strategy, HSQLDBStrategy
from h2db.types import BINARY_LIMIT


@pytest.fixture
def h2():
    return H2Strategy()


@pytest.mark.parametrize(('reported', 'canonical', 'limit'), [
    ('TINYINT(3)', 'tinyint', 1),
    ('SMALLINT(5)', 'smallint', 2),
    ('INT2', 'smallint', 2),
    ('BIGINT(19)', 'bigint', 8),
    ('INT8', 'bigint', 8),
    ('INTEGER(10)', 'int', 4),
    ('INT4', 'int', 4),
    ('DOUBLE(17)', 'double', 8),
    ('REAL(7)', 'real', 4),
    ('DATE(8)', 'date', None),
    ('TIMESTAMP(23)', 'timestamp', None),
    ('TIME(6)', 'time', None),
    ('BOOLEAN(1)', 'boolean', None),
    ('BINARY(2147483647)', 'binary', BINARY_LIMIT),
    ('BYTEA', 'binary', BINARY_LIMIT),
    ('BLOB(2147483647)', 'blob', None),
    ('IMAGE', 'blob', None),
    ('CLOB(2147483647)', 'clob', None),
    ('TEXT', 'clob', None),
    ('DECIMAL(65535,32767)', 'decimal', None),
])
def test_extract_limit(h2, reported, canonical, limit):
    assert h2.extract_limit(reported) == (canonical, limit)


def test_extract_limit_first_match_wins(h2):
    # TIMESTAMP is tried before TIME
    assert h2.extract_limit('TIMESTAMP WITH TIME ZONE') == ('timestamp', None)


def test_extract_limit_defers_to_parent(h2):
    assert h2.extract_limit('VARCHAR(255)') == ('varchar(255)', 255)
    assert h2.extract_limit('DECIMAL(10,2)') == ('decimal(10,2)', 10)
    assert h2.extract_limit('LONGVARCHAR') == ('longvarchar', None)
    assert h2.extract_limit('FLOAT(17)') == ('float(17)', 8)
    assert h2.extract_limit('BIT') == ('bit', None)


def test_unmatched_type_keeps_its_name(h2):
    column = h2.normalize_column(Column('RATIO', 'FLOAT(17)'))
    assert (column.sql_type, column.limit, column.type) == ('float(17)', 8, 'float')
    column = h2.normalize_column(Column('FLAG', 'BIT'))
    assert (column.sql_type, column.limit, column.type) == ('bit', None, 'boolean')
    assert h2.extract_limit(column.sql_type) == ('bit', None)


def test_normalization_is_idempotent(h2):
    column = h2.normalize_column(Column('ID', 'BIGINT(19)'))
    assert (column.sql_type, column.limit) == ('bigint', 8)
    first = column.to_dict()

    h2.normalize_column(column)
    assert column.to_dict() == first
    assert h2.extract_limit('bigint') == ('bigint', 8)


@pytest.mark.parametrize('reported', [
    'BIGINT(19)', 'VARCHAR(255)', 'DECIMAL(10,2)', 'DECIMAL(65535,32767)',
    'CLOB(2147483647)', 'VARCHAR_IGNORECASE(40)', 'BINARY(16)',
])
def test_reapplying_limit_inference_is_stable(h2, reported):
    canonical, limit = h2.extract_limit(reported)
    assert h2.extract_limit(canonical) == (canonical, limit)


def test_normalize_replaces_reported_type(h2):
    column = h2.normalize_column(Column('PRICE', 'DECIMAL(65535,32767)'))
    assert column.sql_type == 'decimal'
    assert column.limit is None
    assert column.precision is None
    assert column.scale is None
    assert column.type == 'decimal'


def test_normalize_keeps_decimal_precision(h2):
    column = h2.normalize_column(Column('AMOUNT', 'DECIMAL(10,2)'))
    assert column.precision == 10
    assert column.scale == 2
    assert column.type == 'decimal'

    column = h2.normalize_column(Column('COUNT', 'DECIMAL(10,0)'))
    assert column.type == 'integer'


@pytest.mark.parametrize(('field_type', 'expected'), [
    ('bit', 'boolean'),
    ('boolean', 'boolean'),
    ('signed', 'integer'),
    ('year', 'integer'),
    ('real', 'float'),
    ('double', 'float'),
    ('varchar(255)', 'string'),
    ('varchar_ignorecase(40)', 'string'),
    ('binary', 'binary'),
    ('raw', 'binary'),
    ('bytea', 'binary'),
    ('blob', 'binary'),
    ('image', 'binary'),
    ('oid', 'binary'),
])
def test_simplified_type(h2, field_type, expected):
    assert h2.simplified_type(field_type) == expected


@pytest.mark.parametrize(('field_type', 'expected'), [
    ('int', 'integer'),
    ('bigint', 'integer'),
    ('character varying(20)', 'string'),
    ('char(2)', 'string'),
    ('clob', 'text'),
    ('date', 'date'),
    ('time', 'time'),
    ('timestamp', 'datetime'),
    ('decimal', 'decimal'),
    ('uuid', None),
])
def test_simplified_type_defers_to_parent(h2, field_type, expected):
    assert h2.simplified_type(field_type) == expected


@pytest.mark.parametrize(('value', 'expected'), [
    ('(NEXT VALUE FOR PUBLIC.SYSTEM_SEQUENCE_1)', None),
    ('(NEXT VALUE FOR SEQ1)', None),
    ('(next value for seq1)', None),
    ("'abc'", 'abc'),
    ("''", ''),
    ("'it''s'", "it''s"),
    ('5', '5'),
    ('TRUE', 'TRUE'),
    ('CURRENT_TIMESTAMP()', 'CURRENT_TIMESTAMP()'),
    (None, None),
])
def test_default_value(h2, value, expected):
    assert h2.default_value(value) == expected


def test_hsqldb_keeps_identity_default():
    hsqldb = HSQLDBStrategy()
    assert hsqldb.default_value('(NEXT VALUE FOR SEQ1)') == '(NEXT VALUE FOR SEQ1)'
    assert hsqldb.default_value("'abc'") == 'abc'


def test_hsqldb_extract_limit():
    hsqldb = HSQLDBStrategy()
    assert hsqldb.extract_limit('INTEGER(32)') == ('integer', 4)
    assert hsqldb.extract_limit('REAL') == ('real', 8)
    assert hsqldb.extract_limit('VARCHAR(20)') == ('varchar(20)', 20)


def test_compose_sql_type():
    assert compose_sql_type('BIGINT', 19) == 'BIGINT(19)'
    assert compose_sql_type('DECIMAL', 65535, 32767) == 'DECIMAL(65535,32767)'
    assert compose_sql_type('VARCHAR', 255, 0) == 'VARCHAR(255)'
    assert compose_sql_type('DATE') == 'DATE'
    assert compose_sql_type('VARCHAR(10)', 10) == 'VARCHAR(10)'


def test_column_from_metadata():
    row = {
        'column_name': 'ID',
        'type_name': 'BIGINT',
        'character_maximum_length': None,
        'numeric_precision': 19,
        'numeric_scale': 0,
        'column_default': '(NEXT VALUE FOR SEQ1)',
        'is_nullable': 'NO',
    }
    column = Column.from_metadata(row)
    assert column.name == 'ID'
    assert column.sql_type == 'BIGINT(19)'
    assert column.raw_default == '(NEXT VALUE FOR SEQ1)'
    assert column.null is False


def test_column_lookup_by_name():
    columns = [Column('ID', 'int'), Column('NAME', 'varchar')]
    assert Column.get_names(columns) == ['ID', 'NAME']
    assert Column.get_column_by_name(columns, 'name').name == 'NAME'
    assert Column.get_column_by_name(columns, 'missing') is None
