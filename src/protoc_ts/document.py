"""Translate whole .proto documents into TypeScript interface files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO, Union

from protoc_ts.generator.ts_renderer import render_block_close, render_stream_import
from protoc_ts.models import (
    REMOVE,
    ConfigurationError,
    ParseContext,
    StreamBehavior,
    SyntaxVersion,
    TranslateOptions,
)
from protoc_ts.parser.line_tokenizer import read_indentation
from protoc_ts.translator import translate_line

Source = Union[str, bytes, Path, TextIO, BinaryIO]

_SYNTAX_RE = re.compile(r"""^\s*syntax\s*=\s*["'](?P<version>proto[23])["']\s*;""", re.MULTILINE)
_STATEMENT_RE = re.compile(r"^\s*(?:syntax|option)\b")

DEFAULT_INDENT = "  "


def detect_syntax(text: str) -> SyntaxVersion:
    """Return the declared syntax version, proto2 when none is declared."""
    match = _SYNTAX_RE.search(text)
    if not match:
        return SyntaxVersion.PROTO2
    return SyntaxVersion(match.group("version"))


def strip_statements(text: str) -> List[str]:
    """Split text into lines, replacing `syntax` and `option` statements with REMOVE."""
    return [REMOVE if _STATEMENT_RE.match(line) else line for line in text.splitlines()]


def _indent_unit(lines: List[str]) -> str:
    for line in lines:
        indentation = read_indentation(line)
        if indentation.width:
            return indentation.text
    return DEFAULT_INDENT


def translate_document(text: str, options: Optional[TranslateOptions] = None) -> str:
    """Translate a full .proto document into TypeScript declarations.

    Each call builds its own ParseContext, so documents translated one after
    another (or side by side) never share syntax or package state.
    """
    options = options or TranslateOptions()
    context = ParseContext(syntax=detect_syntax(text))
    source_lines = strip_statements(text)

    output: List[str] = []
    namespace_at: Optional[int] = None
    for line in source_lines:
        if line == REMOVE:
            continue
        package_seen = context.package_declared
        translated = translate_line(line, context, options)
        if translated == REMOVE:
            continue
        if context.package_declared and not package_seen:
            namespace_at = len(output)
        output.append(translated)

    if namespace_at is not None:
        unit = _indent_unit(source_lines)
        for i in range(namespace_at + 1, len(output)):
            if output[i]:
                output[i] = unit + output[i]
        output.append(render_block_close())

    if context.uses_stream and options.stream_behavior is not StreamBehavior.STRIP:
        output = [render_stream_import(options.stream_behavior), ""] + output

    return "\n".join(output)


def read_source(source: Source) -> str:
    """Normalize a path, raw bytes, stream or proto text into a single string.

    A str without line breaks that names an existing file or ends in
    ``.proto`` is read from disk; any other str is taken as proto text.
    A leading byte-order mark is dropped. Read errors propagate to the caller.
    """
    text = _read_text(source)
    return text[1:] if text.startswith("\ufeff") else text


def _read_text(source: Source) -> str:
    if source is None or (isinstance(source, (str, bytes, bytearray)) and not source):
        raise ConfigurationError("No file specified")
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).decode("utf-8")
    if isinstance(source, Path):
        return source.read_text(encoding="utf-8")
    if hasattr(source, "read"):
        data = source.read()
        return data.decode("utf-8") if isinstance(data, bytes) else data
    if isinstance(source, str):
        if "\n" not in source and (source.endswith(".proto") or os.path.isfile(source)):
            return Path(source).read_text(encoding="utf-8")
        return source
    raise ConfigurationError(f"Unsupported input type: {type(source).__name__}")


@dataclass
class ParsedInterface:
    """Translated TypeScript text, ready to print or persist."""

    text: str

    def to_string(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text

    def to_file(self, path: Union[str, Path]) -> str:
        Path(path).write_text(self.text, encoding="utf-8")
        return str(path)


def parse(source: Source, options: Optional[TranslateOptions] = None, **option_values) -> ParsedInterface:
    """Read ``source`` and translate it.

    Options come either as a TranslateOptions instance or as keyword values
    (``keep_comments``, ``stream_behavior``, ``strip_empty_lines``); they are
    validated before any input is read.
    """
    if options is None:
        options = TranslateOptions(**option_values)
    elif option_values:
        raise ConfigurationError("Pass either a TranslateOptions instance or option keywords, not both")
    text = read_source(source)
    return ParsedInterface(translate_document(text, options))
