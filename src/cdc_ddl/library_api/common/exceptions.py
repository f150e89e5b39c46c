class CdcDdlException(Exception):
    'Base class for all exceptions'


class CommandLineException(CdcDdlException):
    pass


class ConfigurationNotFoundException(CdcDdlException):
    pass


class InvalidFormatFileException(CdcDdlException):
    pass
