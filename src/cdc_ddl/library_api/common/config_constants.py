import os
from pathlib import Path

__all__ = ['CDC_DDL_CONFIG_DIR', 'PARSER_CONFIG_FILE']

CDC_DDL_CONFIG_DIR_DEFAULT = Path.home() / '.cdc_ddl'
CDC_DDL_CONFIG_DIR_ENV = os.getenv('CDC_DDL_CONFIG_DIR')
CDC_DDL_CONFIG_DIR = Path(CDC_DDL_CONFIG_DIR_ENV) if CDC_DDL_CONFIG_DIR_ENV else CDC_DDL_CONFIG_DIR_DEFAULT

PARSER_CONFIG_FILE = CDC_DDL_CONFIG_DIR / 'config.toml'
