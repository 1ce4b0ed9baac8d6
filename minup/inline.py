"""
Recognition of the minUp inline constructs.

The constructs are rewritten by a fixed sequence of regular expression
substitutions, see L{RULES}.  Each rule runs over the output of the
previous one, so a construct rewritten early is protected from the rules
that follow: the inside of a code span is escaped with
L{minup.escaping.CODEFILTERS} before bold, italic or notes get a chance to
see it, and a whole code block is set aside until the end so not even
inline code reaches into it.  Nothing is ever nested or applied recursively.
"""
import enum
import logging
import re
from re import Match, Pattern
from typing import Callable, List, Optional, Sequence
from urllib.parse import quote

import attr

from minup.escaping import CODEFILTERS, escape

__all__ = ['SpanKind', 'Span', 'Rule', 'RULES', 'encode_uri', 'transform']

logger = logging.getLogger(__name__)

class SpanKind(enum.Enum):
    """
    L{Enum} of the inline constructs, in the order they are recognized.
    """
    CODE_BLOCK  = 'code-block'
    INLINE_CODE = 'inline-code'
    COMMENT     = 'comment'
    LINK        = 'link'
    BOLD        = 'bold'
    ITALIC      = 'italic'
    NOTE        = 'note'

@attr.s(auto_attribs=True, frozen=True)
class Span:
    """
    An inline construct recognized by L{transform}.

    Offsets are relative to the text as it stood when the rule matched,
    that is after the padding and after the rewrites of all previous rules.
    """
    kind: SpanKind
    start: int
    end: int
    text: str
    """The captured inner text, for links the label as written."""
    target: Optional[str] = None
    """The link destination, before percent-encoding."""

# Stands in for a finished code block or an anchor opening tag until every
# rule has run.  Code blocks keep their backticks and newline placeholders,
# anchors keep the underscore of target="_blank" and the URL characters.
_SHIELD = '\x00'
_SHIELD_RE = re.compile(_SHIELD + r'(\d+)' + _SHIELD)

Renderer = Callable[[Match[str], List[str]], str]

@attr.s(auto_attribs=True, frozen=True)
class Rule:
    """
    One substitution of the inline pass.
    """
    kind: SpanKind
    trigger: str
    """The rule is skipped when this substring is absent from the text."""
    pattern: Pattern[str]
    render: Renderer

    def apply(self, text: str, shielded: List[str], spans: Optional[List[Span]]) -> str:
        if self.trigger not in text:
            return text

        def _sub(match: Match[str]) -> str:
            if self.kind is SpanKind.LINK:
                span = Span(self.kind, match.start(), match.end(),
                            match.group(1), target=match.group(2))
            else:
                span = Span(self.kind, match.start(), match.end(), match.group(1))
            logger.debug("%s at %d-%d: %r", span.kind.value, span.start, span.end, span.text)
            if spans is not None:
                spans.append(span)
            return self.render(match, shielded)

        return self.pattern.sub(_sub, text)

def _shield(html: str, shielded: List[str]) -> str:
    shielded.append(html)
    return f'{_SHIELD}{len(shielded) - 1}{_SHIELD}'

def _code_block(match: Match[str], shielded: List[str]) -> str:
    html = '<pre><code>' + escape(match.group(1), CODEFILTERS) + '</code></pre>'
    return _shield(html, shielded)

def _inline_code(match: Match[str], shielded: List[str]) -> str:
    return '<code>' + escape(match.group(1), CODEFILTERS) + '</code>'

def _comment(match: Match[str], shielded: List[str]) -> str:
    return ''

def encode_uri(uri: str) -> str:
    """
    Percent-encode a link destination.

    Same reserved set as ECMAScript's C{encodeURI()}, except that the
    apostrophe is encoded too, so the result is safe inside any attribute
    quoting.  Lone surrogates are encoded as is, so any C{str} goes through.
    """
    return quote(uri, safe=";,/?:@&=+$!*()#", errors="surrogatepass")

def _link(match: Match[str], shielded: List[str]) -> str:
    label, uri = match.group(1, 2)
    anchor = _shield(f'<a href="{encode_uri(uri)}" target="_blank">', shielded)
    return anchor + label.replace("|", " ") + '</a>'

def _wrap(tag: str) -> Renderer:
    def render(match: Match[str], shielded: List[str]) -> str:
        return f'<{tag}>{match.group(1)}</{tag}>'
    return render

def _note(match: Match[str], shielded: List[str]) -> str:
    return f"<span class='note'>NOTE:&nbsp;{match.group(1)}</span>"

_URL = (r'(?:https?://(?:www\.)?)?'
        r'[a-z0-9]+(?:[-.][a-z0-9]+)*\.[a-z]{2,63}'
        r'(?::[0-9]{1,5})?'
        r'(?:/\S*)?')

RULES: Sequence[Rule] = (
    Rule(SpanKind.CODE_BLOCK, '`&lt;',
         re.compile(r'`&lt;(.+?)&gt;`', re.DOTALL), _code_block),
    Rule(SpanKind.INLINE_CODE, '`',
         re.compile(r'`([^`\n]+)`'), _inline_code),
    Rule(SpanKind.COMMENT, '{',
         re.compile(r'\{(.*)\}'), _comment),
    Rule(SpanKind.LINK, '|',
         re.compile(r'(?<!\S)([\w*`.|]+)\|(' + _URL + r')(?!\S)'), _link),
    Rule(SpanKind.BOLD, '*',
         re.compile(r'\*([^\s*](?:[^*\n]*[^\s*])?)\*'), _wrap('b')),
    Rule(SpanKind.ITALIC, '_',
         re.compile(r'_([^\s_](?:[^_\n]*[^\s_])?)_'), _wrap('i')),
    Rule(SpanKind.NOTE, '[',
         re.compile(r'\[([^\n\]]+)\]'), _note),
)
"""
The inline rules, in application order.
"""

def transform(text: str, spans: Optional[List[Span]] = None) -> str:
    """
    Rewrite the inline constructs of an escaped document into HTML.

    @param text: Output of L{minup.escaping.escape}.
    @param spans: If given, every recognized construct is appended to this
        list as a L{Span}.
    @return: The document wrapped in a single C{<p>} element.  Newlines are
        left in place for L{minup.blocks.reassemble}.
    """
    # NUL is not allowed in HTML and is used as the shield marker.
    text = ' ' + text.replace(_SHIELD, '') + ' '
    shielded: List[str] = []
    for rule in RULES:
        text = rule.apply(text, shielded, spans)
    if shielded:
        text = _SHIELD_RE.sub(lambda m: shielded[int(m.group(1))], text)
    return '<p>' + text.strip() + '</p>'
