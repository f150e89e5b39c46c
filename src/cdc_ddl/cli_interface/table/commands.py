"""Table level commands. They resolve every column definition of a DDL statement"""
import click

from ...library_api.common.context import DdlParserContext
from ...library_api.common.logging import get_logger
from ...library_api.ddl.common_algo import ddl_to_table
from ...library_api.utility.decorators import report_error_and_exit, with_parser_context
from ...library_api.utility.json_util import to_json

logger = get_logger()


@click.group(help='Table-related operations')
@click.pass_context
def table(ctx: click.Context):
    pass


@click.command(help='Resolve all column definitions of a CREATE TABLE or '
               'ALTER TABLE ... ADD COLUMN statement and print the table as json.')
@click.option('--indent', type=int, default=None,
              help='Indent the json output with this number of spaces.')
@click.argument('ddl_file', type=click.File('r', encoding='utf-8'))
@click.pass_context
@report_error_and_exit(exctype=Exception)
@with_parser_context
def parse(ctx: click.Context,
          parser_context: DdlParserContext,
          ddl_file,
          indent):
    the_table = ddl_to_table(ddl_file.read(), parser_context)
    logger.info(to_json(the_table.as_dict(), indent=indent))


table.add_command(parse)
