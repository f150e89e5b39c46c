import pytest

from cdc_ddl.library_api.ddl.common_intermediate_representation import (ColumnBuilder,
                                                                        Nullability,
                                                                        TableBuilder,
                                                                        TableId,
                                                                        TablePrimaryKey)
from cdc_ddl.library_api.ddl.exceptions import ParsingException


def _column(name, **kwargs):
    return ColumnBuilder(name=name, type_name='INT', jdbc_type=4, **kwargs).create()


def test_table_id_str():
    assert str(TableId('t')) == 't'
    assert str(TableId('t', schema='db')) == 'db.t'
    assert str(TableId('t', schema='db', catalog='c')) == 'c.db.t'


def test_unset_length_becomes_none():
    column = _column('a')
    assert column.length is None
    assert column.scale is None
    assert column.nullability == Nullability.UNSPECIFIED
    assert column.optional


def test_set_default_value_expression_marks_default():
    builder = ColumnBuilder(name='a')
    builder.set_default_value_expression(None)
    column = builder.create()
    assert column.has_default_value
    assert column.default_value_expression is None


def test_add_column_assigns_positions():
    table_builder = TableBuilder(TableId('t'))
    table_builder.add_column(_column('a'))
    table_builder.add_column(_column('b'))
    assert [(c.name, c.position) for c in table_builder.columns] == [('a', 1), ('b', 2)]


def test_add_column_replaces_same_name_in_place():
    table_builder = TableBuilder(TableId('t'))
    table_builder.add_column(_column('a'))
    table_builder.add_column(_column('b'))
    table_builder.add_column(_column('A', unique=True))
    assert [(c.name, c.position, c.unique) for c in table_builder.columns] == [
        ('A', 1, True), ('b', 2, False)]


def test_primary_key_is_replaced():
    table_builder = TableBuilder(TableId('t'))
    table_builder.add_column(_column('a'))
    table_builder.add_column(_column('b'))
    table_builder.set_primary_key_names('a')
    table_builder.set_primary_key_names('b')
    assert table_builder.create().primary_key_column_names == ('b',)


def test_primary_key_must_name_a_column():
    table_builder = TableBuilder(TableId('t'))
    with pytest.raises(ParsingException):
        table_builder.set_primary_key_names('missing')
    assert not table_builder.has_primary_key()


def test_table_as_dict():
    table_builder = TableBuilder(TableId('t', schema='db'))
    table_builder.add_column(_column('a', nullability=Nullability.NOT_NULL))
    table_builder.set_primary_key_names('a')
    table = table_builder.create()
    assert table.column_with_name('A').name == 'a'
    as_dict = table.as_dict()
    assert as_dict['table'] == 'db.t'
    assert as_dict['primary_key'] == ['a']
    assert as_dict['columns'][0]['optional'] is False
    assert as_dict['columns'][0]['length'] is None


def test_table_primary_key_makes_columns_not_null():
    table_builder = TableBuilder(TableId('t'))
    table_builder.add_column(_column('a'))
    table_builder.add_column(_column('b'))
    table_builder.set_primary_key_names('b')
    table_builder.set_table_primary_key(TablePrimaryKey(('A',)))
    table = table_builder.create()
    assert table.primary_key_column_names == ('A',)
    assert table.column_with_name('a').nullability == Nullability.NOT_NULL
    assert table.column_with_name('b').nullability == Nullability.UNSPECIFIED
