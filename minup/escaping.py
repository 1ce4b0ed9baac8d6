"""
Escape tables and the first stage of the minUp pipeline.

Two read-only tables live here:

    - L{PREFILTERS} is applied to the whole document before any markup is
      recognized.  It drops NUL characters, neutralizes the HTML angle
      brackets, turns explicit backslash escapes (C{\\*}, C{\\_}, ...) into
      numeric character references and normalizes line endings.
    - L{CODEFILTERS} is applied to the inside of code spans and code blocks.
      It neutralizes every character the later inline rules react to, and
      replaces newlines with the C{\\\\} placeholder that
      L{minup.blocks.reassemble} turns back into a newline.

Both tables are ordered: entries are applied one after the other, in
declaration order, each one replacing all occurrences of its key.
"""
from types import MappingProxyType
from typing import Mapping

__all__ = ['PREFILTERS', 'CODEFILTERS', 'NEWLINE_PLACEHOLDER', 'escape']

NEWLINE_PLACEHOLDER = '\\\\'
"""
Stands for a newline inside a code block until the paragraphs are rebuilt.
"""

PREFILTERS: Mapping[str, str] = MappingProxyType({
    # NUL is not allowed in HTML.  Gone before backslashes are paired up.
    '\x00': '',
    '<': '&lt;',
    '>': '&gt;',
    '\\*': '&#42;',
    '\\_': '&#95;',
    '\\-': '&#45;',
    '\\`': '&#96;',
    '\\{': '&#123;',
    '\\}': '&#125;',
    '\\[': '&#91;',
    '\\]': '&#93;',
    '\\\\': '&#92;',
    '\\|': '&#124;',
    '\r\n': '\n',
    '\n\r': '\n',
})

CODEFILTERS: Mapping[str, str] = MappingProxyType({
    '*': '&#42;',
    '_': '&#95;',
    '-': '&#45;',
    '{': '&#123;',
    '}': '&#125;',
    '[': '&#91;',
    ']': '&#93;',
    # Must run before the newline entry, which emits backslashes.
    '\\': '&#92;',
    '|': '&#124;',
    '\n': NEWLINE_PLACEHOLDER,
})

def escape(text: str, table: Mapping[str, str] = PREFILTERS) -> str:
    """
    Apply an escape table to C{text}.

    Every entry of C{table} is applied in order.  There is no shortcut when
    the text holds no backslash: the whole table always runs, so the result
    only depends on the text itself.

    @param text: Raw minUp text, or the inside of a code span.
    @param table: L{PREFILTERS} or L{CODEFILTERS}.
    @return: The escaped text.
    """
    for key, replacement in table.items():
        if key in text:
            text = text.replace(key, replacement)
    return text
