import pytest

from cdc_ddl.library_api.ddl.common_intermediate_representation import UNSET_INT_VALUE
from cdc_ddl.library_api.ddl.data_types import (JdbcType,
                                                MariaDbDataTypeResolver,
                                                normalize_type_name)
from cdc_ddl.library_api.ddl.grammar import (CollectionDataType,
                                             DimensionDataType,
                                             NationalVaryingStringDataType,
                                             SimpleDataType,
                                             StringDataType)


@pytest.mark.parametrize('node, jdbc_type', [
    (StringDataType('varchar'), JdbcType.VARCHAR),
    (DimensionDataType('TINYINT'), JdbcType.SMALLINT),
    (DimensionDataType('TIMESTAMP'), JdbcType.TIMESTAMP_WITH_TIMEZONE),
    (DimensionDataType('DATETIME'), JdbcType.TIMESTAMP),
    (CollectionDataType('ENUM'), JdbcType.CHAR),
    (SimpleDataType('JSON'), JdbcType.OTHER),
    (SimpleDataType('SERIAL'), JdbcType.BIGINT),
    (NationalVaryingStringDataType('national  char varying'), JdbcType.NVARCHAR),
])
def test_jdbc_type_of_registered_names(node, jdbc_type):
    assert MariaDbDataTypeResolver().resolve(node).jdbc_type == jdbc_type


def test_type_defaults():
    resolver = MariaDbDataTypeResolver()
    decimal = resolver.resolve(DimensionDataType('DECIMAL'))
    char = resolver.resolve(StringDataType('CHAR'))
    varchar = resolver.resolve(StringDataType('VARCHAR'))
    assert (decimal.length, decimal.scale) == (10, 0)
    assert char.length == 1
    assert (varchar.length, varchar.scale) == (UNSET_INT_VALUE, UNSET_INT_VALUE)


def test_unsigned_and_zerofill_are_part_of_the_name():
    data_type = MariaDbDataTypeResolver().resolve(
        DimensionDataType('int', unsigned=True, zerofill=True))
    assert data_type.name == 'INT UNSIGNED ZEROFILL'
    assert data_type.jdbc_type == JdbcType.INTEGER


def test_unknown_name_resolves_to_other():
    data_type = MariaDbDataTypeResolver().resolve(SimpleDataType('vector'))
    assert data_type.name == 'VECTOR'
    assert data_type.jdbc_type == JdbcType.OTHER


def test_normalize_type_name():
    assert normalize_type_name(' long   varchar ') == 'LONG VARCHAR'
