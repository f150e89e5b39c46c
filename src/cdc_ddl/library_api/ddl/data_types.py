from typing import Dict, Tuple

from .common_intermediate_representation import DataType, UNSET_INT_VALUE
from .grammar import DataTypeNode, DimensionDataType, SimpleDataType
from .interfaces import DataTypeResolver


__all__ = ['JdbcType', 'MariaDbDataTypeResolver']


class JdbcType:
    """Standard type codes, same values as java.sql.Types."""
    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    OTHER = 1111
    BLOB = 2004
    BOOLEAN = 16
    NCHAR = -15
    NVARCHAR = -9
    TIMESTAMP_WITH_TIMEZONE = 2014


# name -> (jdbc type, default length, default scale)
_MARIADB_DATA_TYPES: Dict[str, Tuple[int, int, int]] = {
    # character strings
    'CHAR': (JdbcType.CHAR, 1, UNSET_INT_VALUE),
    'CHARACTER': (JdbcType.CHAR, 1, UNSET_INT_VALUE),
    'VARCHAR': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'CHARACTER VARYING': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'TINYTEXT': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'TEXT': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'MEDIUMTEXT': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'LONGTEXT': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'LONG': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'LONG VARCHAR': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'BINARY': (JdbcType.BINARY, 1, UNSET_INT_VALUE),
    'VARBINARY': (JdbcType.VARBINARY, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NCHAR': (JdbcType.NCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NATIONAL CHAR': (JdbcType.NCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NATIONAL CHARACTER': (JdbcType.NCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NVARCHAR': (JdbcType.NVARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NATIONAL VARCHAR': (JdbcType.NVARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NCHAR VARCHAR': (JdbcType.NVARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NATIONAL CHAR VARYING': (JdbcType.NVARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'NATIONAL CHARACTER VARYING': (JdbcType.NVARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'ENUM': (JdbcType.CHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'SET': (JdbcType.CHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    # numeric
    'BIT': (JdbcType.BIT, 1, UNSET_INT_VALUE),
    'BOOL': (JdbcType.BOOLEAN, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'BOOLEAN': (JdbcType.BOOLEAN, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'TINYINT': (JdbcType.SMALLINT, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'SMALLINT': (JdbcType.SMALLINT, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'MEDIUMINT': (JdbcType.INTEGER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'INT': (JdbcType.INTEGER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'INTEGER': (JdbcType.INTEGER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'BIGINT': (JdbcType.BIGINT, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'SERIAL': (JdbcType.BIGINT, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'REAL': (JdbcType.REAL, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'FLOAT': (JdbcType.FLOAT, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'DOUBLE': (JdbcType.DOUBLE, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'DOUBLE PRECISION': (JdbcType.DOUBLE, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'DECIMAL': (JdbcType.DECIMAL, 10, 0),
    'DEC': (JdbcType.DECIMAL, 10, 0),
    'FIXED': (JdbcType.DECIMAL, 10, 0),
    'NUMERIC': (JdbcType.NUMERIC, 10, 0),
    # temporal
    'DATE': (JdbcType.DATE, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'TIME': (JdbcType.TIME, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'DATETIME': (JdbcType.TIMESTAMP, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'TIMESTAMP': (JdbcType.TIMESTAMP_WITH_TIMEZONE, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'YEAR': (JdbcType.INTEGER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    # binary large objects
    'TINYBLOB': (JdbcType.BLOB, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'BLOB': (JdbcType.BLOB, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'MEDIUMBLOB': (JdbcType.BLOB, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'LONGBLOB': (JdbcType.BLOB, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'LONG VARBINARY': (JdbcType.BLOB, UNSET_INT_VALUE, UNSET_INT_VALUE),
    # everything else
    'JSON': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'UUID': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'INET4': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'INET6': (JdbcType.VARCHAR, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'GEOMETRY': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'POINT': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'LINESTRING': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'POLYGON': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'MULTIPOINT': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'MULTILINESTRING': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'MULTIPOLYGON': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
    'GEOMETRYCOLLECTION': (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE),
}


def normalize_type_name(type_name: str) -> str:
    return ' '.join(type_name.upper().split())


class MariaDbDataTypeResolver(DataTypeResolver):
    """Resolves MariaDB/MySQL type nodes. Names not in the registry resolve to
    JdbcType.OTHER so the resolver stays total.
    """
    def resolve(self, type_node: DataTypeNode) -> DataType:
        base_name = normalize_type_name(type_node.type_name)
        jdbc_type, length, scale = _MARIADB_DATA_TYPES.get(
            base_name, (JdbcType.OTHER, UNSET_INT_VALUE, UNSET_INT_VALUE))
        name = base_name
        if isinstance(type_node, (DimensionDataType, SimpleDataType)):
            if type_node.unsigned:
                name += ' UNSIGNED'
            if type_node.zerofill:
                name += ' ZEROFILL'
        return DataType(name=name, jdbc_type=jdbc_type, length=length, scale=scale)
