from pathlib import Path

import click
from trogon import tui

from cdc_ddl.cli_interface.table import commands as table_
from cdc_ddl.cli_interface.column import commands as column_

from cdc_ddl.library_api.utility.decorators import report_error_and_exit
from cdc_ddl.library_api.common.context import DdlParserSettings, load_parser_settings
from cdc_ddl.library_api.common.config_constants import PARSER_CONFIG_FILE

from cdc_ddl.library_api.common.logging import set_debug_logger, set_info_logger, get_logger

VERSION = "0.3.0"

logger = get_logger()


def configure_logger(debug=False):
    if debug:
        set_debug_logger()
        return
    set_info_logger()


# pylint: disable=line-too-long
@tui(help='Open textual user interface')
@click.group(help='cdcddl resolves MariaDB and MySQL column definitions into normalized column ' +
             'descriptors: type, length, scale, charset, nullability, key membership and generation flags.')
@click.option('--config-file', metavar='CONFIGFILE', default=None,
              help=f'Parser configuration file (default: {PARSER_CONFIG_FILE}).')
@click.option('--skip-comments/--keep-comments', default=None,
              help='Ignore COMMENT clauses of column definitions.')
@click.option('--dialect', metavar='DIALECT', default=None,
              help="sqlglot dialect used to read DDL statements (default: 'mysql').")
@click.option('--debug', hidden=True, is_flag=True, default=False,
              help='Enable debug mode, which displays additional information and '
                   'debug messages for troubleshooting purposes.')
@click.pass_context
@report_error_and_exit(exctype=Exception)
# pylint: enable=line-too-long
def cdc_ddl(ctx, config_file, skip_comments, dialect, debug):
    """
        Command-line entry point for cdc ddl interface
    """
    configure_logger(debug)
    if ctx.invoked_subcommand == 'version':
        return

    settings = load_parser_settings(Path(config_file) if config_file else PARSER_CONFIG_FILE,
                                    required=config_file is not None)
    DdlParserSettings.update_settings(settings,
                                      skip_comments=skip_comments,
                                      dialect=dialect)
    ctx.obj = {'parsersettings': settings}


@click.command(help='Print cdcddl version')
def version():
    logger.info(VERSION)


cdc_ddl.add_command(table_.table)
cdc_ddl.add_command(column_.column)
cdc_ddl.add_command(version)


def main():
    cdc_ddl() # pylint: disable=no-value-for-parameter


if __name__ == '__main__':
    main()
