"""
Standalone HTML pages for minUp documents.

L{minup.parser.parse} only produces a fragment.  This module wraps it in a
complete XHTML page using L{twisted.web.template}, for the C{--standalone}
option of the command line.
"""
import logging
import re
from typing import List, Optional, Union
from xml.sax import SAXParseException

from twisted.python.failure import Failure
from twisted.web.iweb import IRequest
from twisted.web.template import Element, Tag, XMLString, flattenString, renderer, tags

from minup.parser import parse

__all__ = ['DOCTYPE', 'MinupPage', 'html2stan', 'flatten', 'render_page']

logger = logging.getLogger(__name__)

DOCTYPE = b'''\
<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN"
          "DTD/xhtml1-strict.dtd">
'''

NOTE_STYLE = """\
.note { background: #fff8c4; border-left: 3px solid #e0c200; padding: 0 .3em; }
p.pre { white-space: pre-wrap; font-family: monospace; }
"""

_PAGE_TEMPLATE = '''\
<html xmlns="http://www.w3.org/1999/xhtml"
      xmlns:t="http://twistedmatrix.com/ns/twisted.web.template/0.1"
      t:render="page">
  <head>
    <meta http-equiv="Content-Type" content="text/html; charset=utf-8" />
    <title><t:slot name="title" /></title>
    <style type="text/css"><t:slot name="style" /></style>
    <t:transparent t:render="stylesheet" />
  </head>
  <body t:render="body" />
</html>
'''

# Only the character references XML knows about survive, any other
# ampersand is taken literally.
_BARE_AMPERSAND_RE = re.compile(r'&(?!#[0-9]+;|#x[0-9a-fA-F]+;|lt;|gt;|amp;|quot;|apos;)')

def _to_xhtml(html: str) -> str:
    html = html.replace('&nbsp;', '&#160;')
    html = _BARE_AMPERSAND_RE.sub('&amp;', html)
    return html.replace('<br>', '<br />')

def html2stan(html: str) -> Tag:
    """
    Convert an HTML fragment produced by L{parse} to a Stan tree.

    @param html: An HTML fragment; multiple roots are allowed.
    @return: The fragment as a tree with a transparent root node.
    @raises SAXParseException: If the fragment is not well-formed once
        converted to XHTML, which happens when inline spans cross each other.
    """
    stan = XMLString(f'<div>{_to_xhtml(html)}</div>'.encode('utf-8')).load()[0]
    assert isinstance(stan, Tag)
    assert stan.tagName == 'div'
    stan.tagName = ''
    return stan

def flatten(stan: Union[Tag, Element]) -> bytes:
    """
    Convert a Stan tree or an element to HTML.

    @raises Exception: If the L{flattenString} call fails.
    """
    ret: List[bytes] = []
    err: List[Failure] = []
    flattenString(None, stan).addCallback(ret.append).addErrback(err.append)
    if err:
        raise err[0].value
    return ret[0]

class MinupPage(Element):
    """
    A complete page showing one rendered minUp document.
    """

    loader = XMLString(_PAGE_TEMPLATE)

    def __init__(self, text: str, title: str, stylesheet: Optional[str] = None):
        super().__init__()
        self.text = text
        self.title = title
        self.stylesheet_href = stylesheet

    @renderer
    def page(self, request: Optional[IRequest], tag: Tag) -> Tag:
        return tag.fillSlots(title=self.title, style=NOTE_STYLE)

    @renderer
    def stylesheet(self, request: Optional[IRequest], tag: Tag) -> Union[Tag, str]:
        if not self.stylesheet_href:
            return ''
        return tags.link(rel='stylesheet', type='text/css', href=self.stylesheet_href)

    @renderer
    def body(self, request: Optional[IRequest], tag: Tag) -> Tag:
        html = parse(self.text)
        try:
            content = html2stan(html)
        except SAXParseException as e:
            logger.warning("%s: the rendered document is not well-formed (%s), "
                           "showing it as plain text.", self.title, e)
            content = tags.p(self.text, class_='pre')
        return tag(content)

def render_page(text: str, title: str, stylesheet: Optional[str] = None) -> bytes:
    """
    Parse a minUp document and return it as a complete XHTML page.

    @param text: The minUp document.
    @param title: Page title.
    @param stylesheet: URL of a stylesheet to link, on top of the default
        style for notes.
    @return: The encoded page, starting with L{DOCTYPE}.
    """
    return DOCTYPE + flatten(MinupPage(text, title, stylesheet))
