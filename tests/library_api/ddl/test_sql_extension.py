import pytest

from cdc_ddl.library_api.common.context import DdlParserContext
from cdc_ddl.library_api.ddl.common_algo import column_definition_to_column, ddl_to_table
from cdc_ddl.library_api.ddl.common_intermediate_representation import (Nullability,
                                                                        TableId,
                                                                        TablePrimaryKey)
from cdc_ddl.library_api.ddl.column_definition import MAX_LENGTH
from cdc_ddl.library_api.ddl.data_types import JdbcType
from cdc_ddl.library_api.ddl.exceptions import ParsingException, UnsupportedStatementException
from cdc_ddl.library_api.ddl.extensions import SqlColumnDefinitionsProcessor
from cdc_ddl.library_api.ddl.extensions.sql import normalize_source_ddl
from cdc_ddl.library_api.ddl.grammar import (ColumnDefinition,
                                             DimensionDataType,
                                             LengthTwoOptionalDimension,
                                             NullColumnConstraint,
                                             NullNotnull)

PRODUCTS_DDL = """
CREATE TABLE shop.products (
  id INT NOT NULL AUTO_INCREMENT PRIMARY KEY,
  sku VARCHAR(64) NOT NULL UNIQUE,
  price DECIMAL(10,2) DEFAULT 0,
  name VARCHAR(255) COMMENT 'product name',
  status ENUM('a','b','c'),
  created_at DATETIME
)
"""


def test_processor_yields_table_id_then_definitions():
    tokens = list(SqlColumnDefinitionsProcessor().yield_column_definitions(
        'CREATE TABLE db.t (amount DECIMAL(8,2) NOT NULL)'))
    assert tokens[0] == TableId('t', schema='db')
    name, definition = tokens[1]
    assert name == 'amount'
    assert definition == ColumnDefinition(
        DimensionDataType('DECIMAL', length_two_optional=LengthTwoOptionalDimension('8', '2')),
        (NullColumnConstraint(NullNotnull(not_=True)),))


def test_products_table():
    table = ddl_to_table(PRODUCTS_DDL)
    assert str(table.table_id) == 'shop.products'
    assert [c.name for c in table.columns] == ['id', 'sku', 'price', 'name', 'status', 'created_at']
    assert [c.position for c in table.columns] == [1, 2, 3, 4, 5, 6]
    assert table.primary_key_column_names == ('id',)

    identifier = table.column_with_name('id')
    assert identifier.type_name == 'INT'
    assert identifier.nullability == Nullability.NOT_NULL
    assert identifier.auto_incremented and identifier.generated

    sku = table.column_with_name('sku')
    assert not sku.unique
    assert sku.length == 64
    assert sku.nullability == Nullability.NOT_NULL

    price = table.column_with_name('price')
    assert (price.length, price.scale) == (10, 2)
    assert price.has_default_value
    assert price.default_value_expression == '0'
    assert price.nullability == Nullability.UNSPECIFIED

    assert table.column_with_name('name').comment == 'product name'

    status = table.column_with_name('status')
    assert status.enum_values == ('a', 'b', 'c')
    assert status.length == 1

    assert table.column_with_name('created_at').jdbc_type == JdbcType.TIMESTAMP


def test_unique_column_becomes_primary_key():
    table = ddl_to_table('CREATE TABLE t (code VARCHAR(10) UNIQUE, v INT)')
    assert table.primary_key_column_names == ('code',)


def test_alter_table_add_column():
    table = ddl_to_table('ALTER TABLE db.t ADD COLUMN c INT NOT NULL')
    assert str(table.table_id) == 'db.t'
    assert len(table.columns) == 1
    assert table.columns[0].nullability == Nullability.NOT_NULL


def test_unsigned_and_timestamp_types():
    table = ddl_to_table('CREATE TABLE t (n INT UNSIGNED, ts TIMESTAMP)')
    assert table.column_with_name('n').type_name == 'INT UNSIGNED'
    assert table.column_with_name('ts').type_name == 'TIMESTAMP'
    assert table.column_with_name('ts').jdbc_type == JdbcType.TIMESTAMP_WITH_TIMEZONE


def test_unsupported_statement():
    with pytest.raises(UnsupportedStatementException):
        ddl_to_table('SELECT 1')


def test_unknown_ddl_name():
    with pytest.raises(ParsingException):
        ddl_to_table('CREATE TABLE t (a INT)', ddl_name='yaml')


def test_length_clamped_through_sql():
    context = DdlParserContext()
    column = column_definition_to_column('note VARCHAR(9999999999)', context, table_name='notes')
    assert column.length == MAX_LENGTH
    assert context.diagnostics[0].table_id == 'notes'


def test_column_definition_to_column():
    column = column_definition_to_column('price DECIMAL(10,2) NOT NULL')
    assert column.name == 'price'
    assert (column.length, column.scale) == (10, 2)
    assert not column.optional


def test_column_definition_to_column_rejects_several_columns():
    with pytest.raises(ParsingException):
        column_definition_to_column('a INT, b INT')


def test_serial_default_value_clause():
    table = ddl_to_table('CREATE TABLE t (id BIGINT UNSIGNED SERIAL DEFAULT VALUE, v INT)')
    identifier = table.column_with_name('id')
    assert identifier.type_name == 'BIGINT UNSIGNED'
    assert identifier.nullability == Nullability.NOT_NULL
    assert identifier.unique
    assert identifier.auto_incremented and identifier.generated
    assert table.primary_key_column_names == ('id',)


def test_serial_type():
    column = column_definition_to_column('id SERIAL')
    assert column.type_name == 'BIGINT UNSIGNED'
    assert not column.optional
    assert column.unique


@pytest.mark.parametrize('definition, type_name, length', [
    ('n NATIONAL VARCHAR(10)', 'NVARCHAR', 10),
    ('n NATIONAL CHARACTER VARYING(12)', 'NVARCHAR', 12),
    ('n NCHAR VARCHAR(8)', 'NVARCHAR', 8),
    ('n NATIONAL CHAR', 'NCHAR', 1),
    ('n NATIONAL CHARACTER(4)', 'NCHAR', 4),
])
def test_national_string_types(definition, type_name, length):
    column = column_definition_to_column(definition)
    assert column.type_name == type_name
    assert column.length == length
    assert column.charset_name == 'utf8'


def test_long_varchar_type():
    column = column_definition_to_column('l LONG VARCHAR NOT NULL')
    assert column.type_name == 'LONG VARCHAR'
    assert column.jdbc_type == JdbcType.VARCHAR
    assert column.length is None
    assert not column.optional


def test_column_named_long_is_not_a_long_varchar():
    assert normalize_source_ddl('long VARCHAR(10)') == 'long VARCHAR(10)'
    assert normalize_source_ddl('l LONG VARCHAR') == 'l MEDIUMTEXT CHECK (cdc_ddl_long_varchar)'


@pytest.mark.parametrize('definition, type_name, length', [
    ('z INT UNSIGNED ZEROFILL', 'INT UNSIGNED ZEROFILL', None),
    ('z INT ZEROFILL UNSIGNED', 'INT UNSIGNED ZEROFILL', None),
    ('z INT(5) ZEROFILL', 'INT ZEROFILL', 5),
    ('z DECIMAL(8,2) ZEROFILL', 'DECIMAL ZEROFILL', 8),
])
def test_zerofill_is_kept_in_the_type_name(definition, type_name, length):
    column = column_definition_to_column(definition)
    assert column.type_name == type_name
    assert column.length == length


def test_quoted_text_is_not_rewritten():
    ddl = "CREATE TABLE t (c INT COMMENT 'national char zerofill', `long varchar` TEXT)"
    assert normalize_source_ddl(ddl) == ddl
    table = ddl_to_table(ddl)
    assert table.column_with_name('c').comment == 'national char zerofill'
    assert table.column_with_name('long varchar').type_name == 'TEXT'


def test_table_level_primary_key_replaces_unique_promotion():
    table = ddl_to_table('CREATE TABLE t (code VARCHAR(5) UNIQUE, id INT, PRIMARY KEY (id))')
    assert table.primary_key_column_names == ('id',)
    assert table.column_with_name('id').nullability == Nullability.NOT_NULL
    assert table.column_with_name('code').nullability == Nullability.UNSPECIFIED


def test_processor_yields_table_primary_key_last():
    tokens = list(SqlColumnDefinitionsProcessor().yield_column_definitions(
        'CREATE TABLE t (a INT, b INT, CONSTRAINT pk PRIMARY KEY (a, b))'))
    assert tokens[-1] == TablePrimaryKey(('a', 'b'))
    assert [token[0] for token in tokens[1:-1]] == ['a', 'b']
