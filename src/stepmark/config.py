"""Parse configuration scoped with a ContextVar.

The segmenter and inline formatter read the active ParseConfig instead of
taking options as arguments, so a Markdown instance can apply its settings to
a whole parse without threading them through every call. Each thread (and
each asyncio task) sees its own value.

Usage:
    with parse_config_context(ParseConfig(em_dash=False)):
        doc = segment("Keep -- as typed")

"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Options that change the Document produced for a given source.

    Attributes:
        em_dash: Turn " -- " into a spaced em dash before tokenizing
        text_transformer: Callback run on the payload of each Text span,
            e.g. to substitute placeholders such as a host name

    """

    em_dash: bool = True
    text_transformer: Callable[[str], str] | None = None

    @classmethod
    def from_dict(cls, options: dict[str, Any]) -> "ParseConfig":
        """Build a config from a mapping, ignoring keys that are not options.

        Example:
            >>> ParseConfig.from_dict({"em_dash": False, "theme": "dark"})
            ParseConfig(em_dash=False, text_transformer=None)

        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in options.items() if key in known})


_DEFAULT_CONFIG = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "stepmark_parse_config", default=_DEFAULT_CONFIG
)


def get_parse_config() -> ParseConfig:
    """Return the config active in the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Make ``config`` active for the rest of the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Activate ``config`` for the body of a with-block.

    Whatever was active before is restored on exit, including when the body
    raises, so nested contexts unwind in order.
    """
    token = _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.reset(token)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
