"""Translate single .proto lines into TypeScript declaration lines."""

from __future__ import annotations

import sys
from enum import Enum, auto
from typing import List

from protoc_ts.generator.ts_renderer import (
    render_block_close,
    render_field,
    render_interface_open,
    render_method,
    render_namespace_open,
)
from protoc_ts.models import REMOVE, ParseContext, TranslateOptions, to_pascal
from protoc_ts.parser.field_parser import parse_field
from protoc_ts.parser.line_tokenizer import read_indentation, tokenize
from protoc_ts.parser.rpc_parser import match_rpc


class LineKind(Enum):
    BLANK = auto()
    COMMENT = auto()
    BLOCK_CLOSE = auto()
    MESSAGE_OPEN = auto()
    SERVICE_OPEN = auto()
    RPC = auto()
    PACKAGE = auto()
    FIELD = auto()


_KEYWORDS = {
    "message": LineKind.MESSAGE_OPEN,
    "service": LineKind.SERVICE_OPEN,
    "rpc": LineKind.RPC,
    "package": LineKind.PACKAGE,
}

_COMMENT_PREFIXES = ("//", "/*", "*")


def classify_line(tokens: List[str]) -> LineKind:
    if not tokens:
        return LineKind.BLANK
    first = tokens[0]
    if first.startswith(_COMMENT_PREFIXES):
        return LineKind.COMMENT
    if first.startswith("}"):
        return LineKind.BLOCK_CLOSE
    return _KEYWORDS.get(first, LineKind.FIELD)


def _warn_unchanged(kind: LineKind, line: str) -> str:
    print(f"Warning: unrecognised {kind.name.lower()} line, left unchanged: {line.strip()!r}", file=sys.stderr)
    return line


def _declared_name(tokens: List[str]) -> str:
    # `message Foo {` and `message Foo{` both name Foo
    return tokens[1].split("{")[0].rstrip(";") if len(tokens) > 1 else ""


def translate_line(line: str, context: ParseContext, options: TranslateOptions) -> str:
    """Translate one source line, returning REMOVE for lines to drop.

    Only ``context`` carries state between lines: the syntax version decides
    whether unlabelled fields are optional, and package declarations and
    streaming rpcs are recorded on it.
    """
    tokens = tokenize(line)
    kind = classify_line(tokens)
    indent = read_indentation(line).text

    if kind is LineKind.BLANK:
        return REMOVE if options.strip_empty_lines else ""

    if kind is LineKind.COMMENT:
        return line if options.keep_comments else REMOVE

    if kind is LineKind.BLOCK_CLOSE:
        return indent + render_block_close()

    if kind in (LineKind.MESSAGE_OPEN, LineKind.SERVICE_OPEN):
        name = _declared_name(tokens)
        if not name:
            return _warn_unchanged(kind, line)
        if kind is LineKind.SERVICE_OPEN and context.package_declared:
            name += "Service"
        if "".join(tokens[1:]).rstrip(";").endswith("{}"):
            # `message Empty {}` opens and closes on one line
            return indent + render_interface_open(name) + render_block_close()
        return indent + render_interface_open(name)

    if kind is LineKind.RPC:
        rpc = match_rpc(line)
        if rpc is None:
            return _warn_unchanged(kind, line)
        if rpc.request_is_stream or rpc.response_is_stream:
            context.uses_stream = True
        return indent + render_method(rpc, options.stream_behavior)

    if kind is LineKind.PACKAGE:
        package_name = _declared_name(tokens)
        if not package_name:
            return _warn_unchanged(kind, line)
        context.package_declared = True
        return indent + render_namespace_open(to_pascal(package_name))

    field = parse_field(line, context.syntax)
    if field is None:
        return _warn_unchanged(kind, line)
    return indent + render_field(field)
