"""
The minUp pipeline: L{escape}, then L{transform}, then L{reassemble}.

    >>> parse("*this* is _italic_ and go|https://x.com here")
    '<p><b>this</b> is <i>italic</i> and <a href="https://x.com" target="_blank">go</a> here</p>'
"""
from typing import List, Optional

from minup.escaping import escape
from minup.inline import Span, transform
from minup.blocks import reassemble

__all__ = ['SAMPLE', 'parse', 'test']

SAMPLE = """\
minUp writes *bold* with stars, like `*bold*`, and _italic_ with underscores.
A word and a pipe make a link: docs|https://example.org opens in a new tab,
and several|words|make|one|label|example.org/some/page too.

Inline code is `\\`mono\\``, a comment is `{comment}` {like this one}
and a note is `[note]` [remember the milk].
Markup can be escaped: \\*not bold\\*, \\_not italic\\_, \\[not a note\\].
HTML is never embedded: <div class='shiny'>escaped</div>

A code block goes between backticks and angle brackets:"""
"""
A document using every construct, fed to L{parse} by L{test}.
"""

def parse(text: str, spans: Optional[List[Span]] = None) -> str:
    """
    Convert a minUp document to an HTML fragment.

    @param text: The document, with C{\\n} or C{\\r\\n} line endings.
    @param spans: If given, the recognized inline constructs are appended
        to this list, see L{transform}.
    @return: One or more C{<p>} elements.  No C{<html>} or C{<body>}
        wrapper is added, and the C{note} class needs a stylesheet from
        the caller.
    """
    return reassemble(transform(escape(text), spans))

def test() -> str:
    """
    Render L{SAMPLE}, followed by its own source inside a code block.

    Meant for looking at, not for asserting against.
    """
    return parse(SAMPLE + "\n\n`<" + SAMPLE + ">`")
