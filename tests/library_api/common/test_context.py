import pytest

from cdc_ddl.library_api.common.context import (DdlParserContext,
                                                DdlParserSettings,
                                                load_parser_settings)
from cdc_ddl.library_api.common.exceptions import (ConfigurationNotFoundException,
                                                   InvalidFormatFileException)


@pytest.mark.parametrize('text, expected', [
    ("'abc'", 'abc'),
    ('"abc"', 'abc'),
    ('`abc`', 'abc'),
    ("'abc\"", "'abc\""),
    ("'", "'"),
    ('abc', 'abc'),
    (None, None),
])
def test_without_quotes(text, expected):
    assert DdlParserContext.without_quotes(text) == expected


def test_extract_charset():
    assert DdlParserContext.extract_charset("'utf8mb4'", 'latin1_bin') == 'utf8mb4'
    assert DdlParserContext.extract_charset(None, 'latin1_swedish_ci') == 'latin1'
    assert DdlParserContext.extract_charset(None, None) is None


def test_update_settings_ignores_none():
    settings = DdlParserSettings(skip_comments=True)
    DdlParserSettings.update_settings(settings, skip_comments=None, dialect='mariadb')
    assert settings.skip_comments
    assert settings.dialect == 'mariadb'


def test_missing_configuration_uses_defaults(tmp_path):
    assert load_parser_settings(tmp_path / 'config.toml') == DdlParserSettings()


def test_missing_required_configuration(tmp_path):
    with pytest.raises(ConfigurationNotFoundException):
        load_parser_settings(tmp_path / 'config.toml', required=True)


def test_load_parser_settings(tmp_path):
    config_file = tmp_path / 'config.toml'
    config_file.write_text('[parser]\nskip_comments = true\n', encoding='utf-8')
    settings = load_parser_settings(config_file)
    assert settings.skip_comments
    assert settings.dialect == 'mysql'


def test_unknown_parser_keys_are_rejected(tmp_path):
    config_file = tmp_path / 'config.toml'
    config_file.write_text('[parser]\nstrict = true\n', encoding='utf-8')
    with pytest.raises(InvalidFormatFileException):
        load_parser_settings(config_file)


def test_invalid_toml_is_rejected(tmp_path):
    config_file = tmp_path / 'config.toml'
    config_file.write_text('[parser\n', encoding='utf-8')
    with pytest.raises(InvalidFormatFileException):
        load_parser_settings(config_file)


def test_new_context_has_no_diagnostics():
    context = DdlParserContext()
    assert context.diagnostics == []
    assert not context.skip_comments
