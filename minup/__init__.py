"""minUp, a minimal line-oriented markup language, converted to HTML.

The whole conversion is L{parse}; see L{minup.parser} for the pipeline.
"""

import importlib.metadata as importlib_metadata

from minup.escaping import escape
from minup.inline import Span, SpanKind, transform
from minup.blocks import reassemble
from minup.parser import parse, test

__version__ = importlib_metadata.version('minup')

__all__ = ["__version__", "parse", "test", "escape", "transform",
           "reassemble", "Span", "SpanKind"]
