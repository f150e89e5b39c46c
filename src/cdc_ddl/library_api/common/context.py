from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import toml

from .exceptions import ConfigurationNotFoundException, InvalidFormatFileException
from .logging import get_logger

logger = get_logger()

_QUOTES = ("'", '"', '`')


@dataclass
class DdlParserSettings:
    """Settings that change how column definitions are resolved.
    Loaded from the [parser] table of the configuration file.
    """
    skip_comments: bool = False
    dialect: str = 'mysql'

    @staticmethod
    def update_settings(settings, **kwargs):
        """
            Method used to override settings from command line options
        """
        for key, value in kwargs.items():
            if hasattr(settings, key) and value is not None:
                setattr(settings, key, value)


@dataclass(frozen=True)
class LengthClampDiagnostic:
    component: str
    table_id: Optional[str]
    column_name: str
    attempted_length: int
    clamped_length: int


@dataclass
class DdlParserContext:
    """Per statement parsing context shared by the resolvers of one DDL statement.
    Holds the active settings and collects non fatal diagnostics.
    """
    settings: DdlParserSettings = field(default_factory=DdlParserSettings)
    diagnostics: List[LengthClampDiagnostic] = field(default_factory=list)

    @property
    def skip_comments(self) -> bool:
        return self.settings.skip_comments

    def report(self, diagnostic: LengthClampDiagnostic):
        self.diagnostics.append(diagnostic)

    @staticmethod
    def without_quotes(text: Optional[str]) -> Optional[str]:
        if text is None or len(text) < 2:
            return text
        if text[0] in _QUOTES and text[-1] == text[0]:
            return text[1:-1]
        return text

    @staticmethod
    def extract_charset(charset_name: Optional[str],
                        collation_name: Optional[str]) -> Optional[str]:
        """Charset named by an explicit CHARACTER SET clause, otherwise the one
        implied by a COLLATE clause (the collation prefix before the first '_').
        """
        if charset_name:
            return DdlParserContext.without_quotes(charset_name)
        if collation_name:
            collation = DdlParserContext.without_quotes(collation_name)
            return collation.split('_', 1)[0]
        return None


def load_parser_settings(config_file: Optional[Path],
                         *,
                         required: bool = False) -> DdlParserSettings:
    settings = DdlParserSettings()
    if config_file is None or not Path(config_file).exists():
        if required:
            raise ConfigurationNotFoundException(f'Configuration file not found: {config_file}')
        logger.debug(f'No configuration at {config_file}, using defaults')
        return settings

    try:
        with open(config_file, 'r', encoding='utf-8') as cfile:
            config = toml.load(cfile)
    except toml.TomlDecodeError as decode_error:
        raise InvalidFormatFileException(
            f'Invalid configuration file {config_file}: {decode_error}') from decode_error

    parser_section = config.get('parser', {})
    known_keys = {f.name for f in fields(DdlParserSettings)}
    if unknown := sorted(set(parser_section) - known_keys):
        raise InvalidFormatFileException(
            f"Unknown keys in [parser] section of {config_file}: {', '.join(unknown)}")
    DdlParserSettings.update_settings(settings, **parser_section)
    return settings
