"""The entry point."""

from typing import Iterator, List, Optional, Sequence, Tuple
import logging
import sys
from pathlib import Path

from minup.options import Options
from minup.utils import error
from minup.inline import Span
from minup.parser import parse, test
from minup.page import render_page

logger = logging.getLogger('minup')

def setup_logging(options: Options) -> None:
    """
    Send the C{minup} loggers to standard error, filtered by the verbosity.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.addHandler(handler)
    logger.setLevel(options.loglevel)

def read_documents(options: Options) -> Iterator[Tuple[Optional[Path], str]]:
    """
    Yield C{(path, text)} for each input, C{path} is C{None} for standard input.

    Watch out, prints a message and SystemExits on unreadable files!
    """
    for path in options.sourcepath:
        if path is None:
            yield None, sys.stdin.read()
            continue
        try:
            text = path.read_text(encoding=options.encoding)
        except (OSError, UnicodeDecodeError) as e:
            error(f"Cannot read {path}: {e}")
        yield path, text

def convert(text: str, name: str, options: Options) -> str:
    """
    Convert one document according to the options.
    """
    if options.standalone:
        title = options.title or name
        return render_page(text, title, options.stylesheet).decode('utf-8')
    spans: List[Span] = []
    html = parse(text, spans)
    logger.info("%s: %d inline spans", name, len(spans))
    return html

def make(options: Options) -> None:
    """
    Convert every input and write the results where the options say.
    """
    outdir = options.htmloutput
    if outdir is not None:
        try:
            outdir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error(f"--html-output: cannot create {outdir}: {e}")

    for path, text in read_documents(options):
        name = path.stem if path is not None else 'stdin'
        html = convert(text, name, options)
        if outdir is None:
            print(html)
            continue
        target = outdir / f'{name}.html'
        logger.info("writing html to %s", target)
        try:
            target.write_text(html, encoding='utf-8')
        except OSError as e:
            error(f"Cannot write {target}: {e}")

def main(args: Sequence[str] = sys.argv[1:]) -> int:
    """
    This is the console_scripts entry point for minup CLI.

    @param args: Command line arguments to run the CLI.
    """
    options = Options.from_args(args)
    setup_logging(options)

    if options.selftest:
        print(test())
        return 0

    make(options)
    return 0
