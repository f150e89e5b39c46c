from ...library_api.common.exceptions import CdcDdlException


class ParsingException(CdcDdlException):
    pass


# Raised for input the grammar should never have produced, e.g. a non numeric
# length literal. The whole statement is rejected.
class GrammarInvariantException(ParsingException):
    pass


class UnsupportedStatementException(ParsingException):
    pass
