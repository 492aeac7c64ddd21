"""Tests for ContextVar-based parse configuration."""

import pytest

from stepmark import parse
from stepmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from stepmark.nodes import Text


@pytest.fixture(autouse=True)
def _clean_config():
    reset_parse_config()
    yield
    reset_parse_config()


class TestParseConfig:
    def test_defaults(self) -> None:
        config = ParseConfig()
        assert config.em_dash is True
        assert config.text_transformer is None

    def test_frozen(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.em_dash = False  # type: ignore[misc]

    def test_from_dict(self) -> None:
        config = ParseConfig.from_dict({"em_dash": False})
        assert config.em_dash is False

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"em_dash": False, "tables_enabled": True})
        assert config == ParseConfig(em_dash=False)


class TestContext:
    """Config lookup and restore."""

    def test_default_config(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        set_parse_config(ParseConfig(em_dash=False))
        assert get_parse_config().em_dash is False
        reset_parse_config()
        assert get_parse_config().em_dash is True

    def test_context_manager_restores(self) -> None:
        with parse_config_context(ParseConfig(em_dash=False)):
            assert get_parse_config().em_dash is False
        assert get_parse_config().em_dash is True

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(em_dash=False)):
                raise RuntimeError("boom")
        assert get_parse_config().em_dash is True

    def test_nested_contexts(self) -> None:
        outer = ParseConfig(em_dash=False)
        inner = ParseConfig(text_transformer=str.lower)
        with parse_config_context(outer):
            with parse_config_context(inner):
                assert get_parse_config() is inner
            assert get_parse_config() is outer

    def test_parse_reads_current_config(self) -> None:
        with parse_config_context(ParseConfig(em_dash=False)):
            doc = parse("a -- b")
        assert doc.children[0].children == (Text("a -- b"),)
