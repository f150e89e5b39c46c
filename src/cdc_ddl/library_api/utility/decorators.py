from functools import wraps
import sys

from ..common.context import DdlParserContext
from ..common.logging import get_logger

logger = get_logger()


def report_error_and_exit(exctype=Exception, exit_code=-1):
    def report_deco(func):
        @wraps(func)
        def report_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exctype as exc:
                logger.debug(f'{exc!r}')
                logger.error(f'Error: {exc}')
                sys.exit(exit_code)
        return report_wrapper
    return report_deco


def with_parser_context(f):
    """Passes a fresh parsing context, built from the settings loaded by the main group."""
    @wraps(f)
    def decorated_function(ctx, *args, **kwargs):
        settings = ctx.find_root().obj['parsersettings']
        return f(ctx, DdlParserContext(settings=settings), *args, **kwargs)
    return decorated_function
