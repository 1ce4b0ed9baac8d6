"""
The command-line parsing.
"""

from typing import List, Optional, Sequence
import logging
from argparse import Namespace
from pathlib import Path

from configargparse import ArgumentParser
import attr

from minup import __version__
from minup.utils import parse_path
from minup._configparser import CompositeConfigParser, IniConfigParser, TomlConfigParser, ValidatorParser

DEFAULT_CONFIG_FILES = ['./pyproject.toml', './setup.cfg', './minup.ini']
CONFIG_SECTIONS = ['tool.minup', 'tool:minup', 'minup']

STDIN = '-'

__all__ = ("Options", )

# CONFIGURATION PARSING

MinupConfigParser = CompositeConfigParser(
                [TomlConfigParser(CONFIG_SECTIONS),
                 IniConfigParser(CONFIG_SECTIONS)])

# ARGUMENTS PARSING

def get_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='minup',
        description="Convert minUp documents to HTML.",
        usage="minup [options] [PATH...]",
        default_config_files=DEFAULT_CONFIG_FILES,
        config_file_parser_class=MinupConfigParser)

    # Add the validator to the config file parser, this is arguably a hack.
    parser._config_file_parser = ValidatorParser(parser._config_file_parser, parser)

    parser.add_argument(
        '-c', '--config', is_config_file=True,
        help=("Load config from this file (any command line "
              "options override settings from the file)."), metavar="PATH",)
    parser.add_argument(
        '--html-output', dest='htmloutput', metavar='PATH',
        help=("Directory to write one NAME.html file per input to. "
              "The HTML goes to standard output if not given."))
    parser.add_argument(
        '--encoding', dest='encoding', default='utf-8', metavar='ENCODING',
        help=("Encoding of the input files (default 'utf-8'). HTML is always written as UTF-8."))
    parser.add_argument(
        '--standalone', dest='standalone', action='store_true', default=False,
        help=("Wrap each fragment in a complete HTML page."))
    parser.add_argument(
        '--title', dest='title', metavar='TITLE',
        help=("Title of the standalone pages. Defaults to the input file name."))
    parser.add_argument(
        '--stylesheet', dest='stylesheet', metavar='URL',
        help=("Stylesheet to link from the standalone pages."))
    parser.add_argument(
        '--self-test', dest='selftest', action='store_true', default=False,
        help=("Print the rendering of the built-in sample document and exit."))
    parser.add_argument(
        '--verbose', '-v', action='count', dest='verbosity',
        default=0,
        help=("Be noisier.  Can be repeated for more noise."))
    parser.add_argument(
        '--quiet', '-q', action='count', dest='quietness',
        default=0,
        help=("Be quieter."))

    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')

    parser.add_argument(
        'sourcepath', metavar='PATH',
        help=(f"minUp documents to convert, {STDIN!r} or nothing reads standard input."),
        nargs="*", default=[],
    )
    return parser

def parse_args(args: Sequence[str]) -> Namespace:
    parser = get_parser()
    options = parser.parse_args(args)
    assert isinstance(options, Namespace)
    options.verbosity -= options.quietness
    return options

# CONVERTERS

def _convert_sourcepath(l: List[str]) -> List[Optional[Path]]:
    # None stands for standard input.
    return [None if p == STDIN else parse_path(p, opt='PATH') for p in l] or [None]
def _convert_htmloutput(s: Optional[str]) -> Optional[Path]:
    if s: return parse_path(s, opt='--html-output')
    else: return None

# TYPED OPTIONS CONTAINER

@attr.s
class Options:
    """
    Container for all possible minup options.

    See C{minup --help} for more informations.
    """
    # Avoid to define default values for config options here because it's taken care of by argparse.

    sourcepath:     List[Optional[Path]]    = attr.ib(converter=_convert_sourcepath)
    htmloutput:     Optional[Path]          = attr.ib(converter=_convert_htmloutput)
    encoding:       str                     = attr.ib()
    standalone:     bool                    = attr.ib()
    title:          Optional[str]           = attr.ib()
    stylesheet:     Optional[str]           = attr.ib()
    selftest:       bool                    = attr.ib()
    verbosity:      int                     = attr.ib()
    quietness:      int                     = attr.ib()

    @property
    def loglevel(self) -> int:
        """
        The L{logging} level matching the verbosity.
        """
        if self.verbosity < 0:
            return logging.ERROR
        return {0: logging.WARNING, 1: logging.INFO}.get(self.verbosity, logging.DEBUG)

    # HIGH LEVEL FACTORY METHODS

    @classmethod
    def defaults(cls,) -> 'Options':
        return cls.from_args([])

    @classmethod
    def from_args(cls, args: Sequence[str]) -> 'Options':
        return cls.from_namespace(parse_args(args))

    @classmethod
    def from_namespace(cls, args: Namespace) -> 'Options':
        argsdict = vars(args)

        # remove the config argument
        argsdict.pop('config')

        return cls(**argsdict)
