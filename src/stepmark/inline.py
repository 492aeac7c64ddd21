"""Inline formatting for stepmark.

Turns the text of a single heading, list item, paragraph or table cell into
an ordered tuple of spans.

Recognized markers, tried in this order at each position:
- `code`
- **bold**
- *italic*
- __bold__
- [text](url)

Formatting does not nest: the payload of a matched span is taken literally.
A marker without its closing half is left in the surrounding Text span.

Thread Safety:
All functions are pure. Configuration is read from ContextVar (thread-local).

"""

import re
from collections.abc import Callable

from stepmark.config import get_parse_config
from stepmark.nodes import Bold, Code, Italic, Link, Span, Text

EM_DASH_SOURCE = " -- "
EM_DASH = " — "

_CODE_SPAN = re.compile(r"`([^`]+)`")
_STAR_STRONG = re.compile(r"\*\*([^*]+)\*\*")
_STAR_EMPHASIS = re.compile(r"\*([^*]+)\*")
_UNDERSCORE_STRONG = re.compile(r"__([^_]+)__")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Characters that can open a span; everything else is plain text
_SPECIAL = re.compile(r"[`*_\[]")

type _Builder = Callable[[re.Match[str]], Span]

# Candidate patterns per opening character, in precedence order
_MATCHERS: dict[str, tuple[tuple[re.Pattern[str], _Builder], ...]] = {
    "`": ((_CODE_SPAN, lambda m: Code(m.group(1))),),
    "*": (
        (_STAR_STRONG, lambda m: Bold(m.group(1))),
        (_STAR_EMPHASIS, lambda m: Italic(m.group(1))),
    ),
    "_": ((_UNDERSCORE_STRONG, lambda m: Bold(m.group(1))),),
    "[": ((_LINK, lambda m: Link(m.group(1), m.group(2))),),
}


def inline(text: str) -> tuple[Span, ...]:
    """Tokenize one line of text into spans.

    Never fails; text with no recognizable markup becomes a single Text span
    and empty input produces no spans.

    Args:
        text: Line payload with block markers already removed

    Returns:
        Tuple of spans in source order

    Example:
        >>> inline("**bold** and [x](http://y)")
        (Bold(content='bold'), Text(content=' and '), Link(text='x', url='http://y'))

    """
    if not text:
        return ()

    config = get_parse_config()
    if config.em_dash:
        text = text.replace(EM_DASH_SOURCE, EM_DASH)
    transform = config.text_transformer

    spans: list[Span] = []
    text_start = 0
    pos = 0
    text_len = len(text)

    while pos < text_len:
        special = _SPECIAL.search(text, pos)
        if special is None:
            break
        pos = special.start()

        match = None
        build = None
        for pattern, builder in _MATCHERS[text[pos]]:
            match = pattern.match(text, pos)
            if match is not None:
                build = builder
                break

        if match is None or build is None:
            pos += 1
            continue

        if text_start < pos:
            spans.append(_make_text(text[text_start:pos], transform))
        spans.append(build(match))
        pos = match.end()
        text_start = pos

    if text_start < text_len:
        spans.append(_make_text(text[text_start:], transform))

    return tuple(spans)


def _make_text(content: str, transform: Callable[[str], str] | None) -> Text:
    if transform is not None:
        content = transform(content)
    return Text(content)
