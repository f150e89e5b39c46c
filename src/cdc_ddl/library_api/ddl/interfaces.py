from abc import ABC, abstractmethod
from typing import Iterator, Tuple, Union

from .common_intermediate_representation import DataType, TableId, TablePrimaryKey
from .grammar import ColumnDefinition, DataTypeNode, GrammarNode


# pylint: disable=R0903
class ParseTreeListener(ABC):
    """Receives enter/exit notifications for every node of a column definition.
    Nodes a listener is not interested in are simply ignored.
    """
    def enter(self, node: GrammarNode):
        pass

    def exit(self, node: GrammarNode):
        pass


# pylint: disable=R0903
class DataTypeResolver(ABC):
    @abstractmethod
    def resolve(self, type_node: DataTypeNode) -> DataType:
        """Given a type node, return its canonical name, standard (JDBC) type code
        and default dimensions. Must be pure and total over all type shapes.
        """


class DefaultValueListener(ParseTreeListener):
    @abstractmethod
    def flush(self, force: bool):
        """Apply any pending default value and nullability decision onto the
        active column builder. Safe to call when no default value was seen.
        """


# pylint: disable=R0903
class SourceToColumnDefinitionsProcessor(ABC):
    @abstractmethod
    def yield_column_definitions(self, source_ddl: str) -> Iterator[
            Union[TableId, Tuple[str, ColumnDefinition], TablePrimaryKey]]:
        """Given a ddl statement, it returns an iterator that first returns the
        id of the table the statement applies to and then, one by one, the
        name and grammar node of all column definitions encountered, and finally
        any table level primary key.
        """
