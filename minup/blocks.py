"""
Last stage of the pipeline: rebuild paragraphs and line breaks.
"""
import re

from minup.escaping import NEWLINE_PLACEHOLDER

__all__ = ['reassemble']

_PARAGRAPH_BREAK_RE = re.compile(r'\n\n+')

def reassemble(html: str) -> str:
    """
    Turn the newlines left by L{minup.inline.transform} into HTML.

    Runs of blank lines close the current paragraph and open a new one,
    single newlines become C{<br>}.  Only then are the code block newline
    placeholders put back, so they are never mistaken for paragraph breaks.
    """
    html = _PARAGRAPH_BREAK_RE.sub('</p><p>', html)
    html = html.replace('\n', '<br>')
    return html.replace(NEWLINE_PLACEHOLDER, '\n')
