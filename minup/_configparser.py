"""
Config file parsers for L{configargparse}, bound to named sections.

minup reads its options from the C{[tool.minup]} table of a
C{pyproject.toml}, the C{[tool:minup]} section of a C{setup.cfg} or the
C{[minup]} section of a C{minup.ini}.  Keys are the long option names.
"""
from __future__ import annotations

import argparse
from ast import literal_eval
import configparser
from typing import Any, Callable, Dict, Iterable, List, Optional, TextIO, Tuple, Union
import warnings

from configargparse import ConfigFileParserException, ConfigFileParser, ArgumentParser
import toml

ConfigValue = Union[str, List[str]]

def unquote_str(text: str) -> str:
    """
    Strip the quotes of a value written as a python string literal.
    Anything else is returned unchanged.

    @raises ValueError: If the value is quoted but is not a string literal.
    """
    if len(text) < 2 or text[0] not in '\'"' or text[-1] != text[0]:
        return text
    try:
        value = literal_eval(text)
    except (ValueError, SyntaxError) as e:
        raise ValueError(f"Invalid quoted string {text}: {e}") from e
    if not isinstance(value, str):
        raise ValueError(f"Invalid quoted string {text}")
    return value

def get_toml_section(data: Dict[str, Any], section: Union[Tuple[str, ...], str]) -> Optional[Dict[str, Any]]:
    """
    Look up a dotted table name like C{'tool.minup'} in loaded TOML data.

    @return: The table, or C{None} if there is no such table.
    """
    if isinstance(section, str):
        section = tuple(part.strip() for part in section.split('.'))
    node: Any = data
    for part in section:
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, dict) and node else None

class _SectionConfigParser(ConfigFileParser):
    """
    Base of the TOML and INI parsers: reads the first of C{sections} found
    in the file, and turns its values into strings for argparse.
    """
    syntax = ''

    def __init__(self, sections: List[str]) -> None:
        super().__init__()
        self.sections = sections

    def __call__(self) -> ConfigFileParser:
        return self

    def get_syntax_description(self) -> str:
        return self.syntax

    def _items(self, stream: TextIO) -> Iterable[Tuple[str, Any]]:
        raise NotImplementedError()

    def _convert(self, value: Any) -> Optional[ConfigValue]:
        raise NotImplementedError()

    def parse(self, stream: TextIO) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in self._items(stream):
            converted = self._convert(value)
            if converted is not None:
                result[key] = converted
        return result

class TomlConfigParser(_SectionConfigParser):
    """
    Reads a table of a TOML file, for instance::

        [tool.minup]
        encoding = "latin-1"
        standalone = true
        verbose = 1
    """
    syntax = "TOML, see https://toml.io."

    def _items(self, stream: TextIO) -> Iterable[Tuple[str, Any]]:
        try:
            data = toml.load(stream)
        except Exception as e:
            # The toml library does not always raise TomlDecodeError.
            raise ConfigFileParserException(f"Invalid TOML: {e}") from e
        for section in self.sections:
            table = get_toml_section(data, section)
            if table:
                return table.items()
        return ()

    def _convert(self, value: Any) -> Optional[ConfigValue]:
        if isinstance(value, list):
            return [str(v) for v in value]
        if isinstance(value, bool):
            # argparse expects "true", python spells it "True".
            return 'true' if value else 'false'
        return None if value is None else str(value)

class IniConfigParser(_SectionConfigParser):
    """
    Reads a section of an INI file.  Values may be quoted, and lists are
    written with the python syntax::

        [tool:minup]
        title = 'My notes'
        sourcepath = ['notes.mu', 'todo.mu']
    """
    syntax = "INI, quoted strings and python lists are understood."

    def _items(self, stream: TextIO) -> Iterable[Tuple[str, Any]]:
        config = configparser.ConfigParser()
        try:
            config.read_file(stream)
        except configparser.Error as e:
            raise ConfigFileParserException(f"Invalid INI: {e}") from e
        for section in self.sections:
            if config.has_section(section):
                return config.items(section, raw=True)
        return ()

    def _convert(self, value: Any) -> Optional[ConfigValue]:
        if value.startswith('[') and value.endswith(']'):
            try:
                items = literal_eval(value)
            except (ValueError, SyntaxError) as e:
                raise ConfigFileParserException(
                    f"Invalid list {value}: {e}; quote the value if it is meant as text.") from e
            return [str(v) for v in items]
        try:
            return unquote_str(value)
        except ValueError as e:
            raise ConfigFileParserException(str(e)) from e

class CompositeConfigParser(ConfigFileParser):
    """
    Tries each parser in turn and returns the result of the first one that
    understands the file.
    """

    def __init__(self, parser_factories: List[Callable[[], ConfigFileParser]]) -> None:
        super().__init__()
        self.parsers = [factory() for factory in parser_factories]

    def __call__(self) -> ConfigFileParser:
        return self

    def parse(self, stream: TextIO) -> Dict[str, Any]:
        failures: List[str] = []
        for parser in self.parsers:
            stream.seek(0)
            try:
                return parser.parse(stream) # type: ignore[no-any-return]
            except ConfigFileParserException as e:
                failures.append(str(e))
        raise ConfigFileParserException("Unreadable config file: " + '; '.join(failures))

    def get_syntax_description(self) -> str:
        return ' or '.join(p.get_syntax_description() for p in self.parsers)

class ValidatorParser(ConfigFileParser):
    """
    Drops, with a warning, the keys that no option of C{argument_parser}
    accepts.  Installed over the parser the L{ArgumentParser} built.
    """

    def __init__(self, config_parser: ConfigFileParser, argument_parser: ArgumentParser) -> None:
        super().__init__()
        self.config_parser = config_parser
        self.argument_parser = argument_parser

    def get_syntax_description(self) -> str:
        return self.config_parser.get_syntax_description() #type:ignore[no-any-return]

    def parse(self, stream: TextIO) -> Dict[str, Any]:
        actions: List[argparse.Action] = self.argument_parser._actions
        known = {key for action in actions
                     for key in self.argument_parser.get_possible_config_keys(action)}
        data: Dict[str, Any] = self.config_parser.parse(stream)
        for key in data.keys() - known:
            warnings.warn(f"No such config option: {key!r}")
        return {key: value for key, value in data.items() if key in known}
