import re
from typing import Callable, Optional

from ..common.context import DdlParserContext
from ..common.logging import get_logger
from .common_intermediate_representation import ColumnBuilder, Nullability
from .grammar import DefaultValue, GrammarNode
from .interfaces import DefaultValueListener


__all__ = ['MariaDbDefaultValueListener']

logger = get_logger()

EPOCH_TIMESTAMP = '1970-01-01 00:00:00'

_CURRENT_TIMESTAMP = re.compile(r'^(CURRENT_TIMESTAMP|NOW)\s*(\(\s*\d*\s*\))?$', re.IGNORECASE)


def default_value_expression(text: str) -> Optional[str]:
    """Normalize the literal text of a DEFAULT clause. None stands for DEFAULT NULL."""
    stripped = text.strip()
    if stripped.upper() == 'NULL':
        return None
    if _CURRENT_TIMESTAMP.match(stripped):
        return EPOCH_TIMESTAMP
    return DdlParserContext.without_quotes(stripped)


class MariaDbDefaultValueListener(DefaultValueListener):
    """Observes the DEFAULT clause of the column being resolved.

    The decision is applied once: right away when nullability is already known
    at the DEFAULT clause, otherwise when the owner forces it at the end of the
    column definition.
    """
    def __init__(self, column_builder: ColumnBuilder,
                 observed_nullability: Callable[[], Nullability]):
        self._column_builder = column_builder
        self._observed_nullability = observed_nullability
        self._has_default = False
        self._expression: Optional[str] = None
        self._applied = False

    def enter(self, node: GrammarNode):
        match node:
            case DefaultValue(text=text):
                self._has_default = True
                self._expression = default_value_expression(text)
                self.flush(force=False)
            case _:
                pass

    def flush(self, force: bool):
        if self._applied:
            return
        nullability = self._observed_nullability()
        if nullability != Nullability.UNSPECIFIED:
            self._column_builder.nullability = nullability
        if nullability == Nullability.UNSPECIFIED and not force:
            return
        if self._has_default:
            logger.debug(f'Default value of column {self._column_builder.name}: {self._expression}')
            self._column_builder.set_default_value_expression(self._expression)
        self._applied = True
