from __future__ import annotations

import re
import sys
from typing import Optional, Union

from protoc_ts.generator.ts_renderer import render_method
from protoc_ts.models import RpcDescriptor, StreamBehavior
from protoc_ts.parser.line_tokenizer import read_indentation

# rpc Name([stream] Request) returns ([stream] Response) {}
_RPC_RE = re.compile(
    r"^\s*rpc\s+(?P<method>\w+)\s*"
    r"\(\s*(?P<request_stream>stream\s+)?(?P<request>[\w.]+)\s*\)\s*"
    r"returns\s*"
    r"\(\s*(?P<response_stream>stream\s+)?(?P<response>[\w.]+)\s*\)\s*"
    r"(?:\{\s*\}|;)?\s*;?\s*(?://.*)?$"
)


def match_rpc(line: str) -> Optional[RpcDescriptor]:
    """Extract an RpcDescriptor from an rpc declaration, or None if it doesn't fit."""
    match = _RPC_RE.match(line)
    if not match:
        return None
    return RpcDescriptor(
        method_name=match.group("method"),
        request_type=match.group("request"),
        response_type=match.group("response"),
        request_is_stream=match.group("request_stream") is not None,
        response_is_stream=match.group("response_stream") is not None,
    )


def parse_rpc_line(
    line: str,
    stream_behavior: Union[str, StreamBehavior] = StreamBehavior.NATIVE,
) -> str:
    """Translate an rpc declaration into a TypeScript method signature.

    A line that does not have the expected shape is returned unchanged so the
    rest of the document still translates.
    """
    behavior = StreamBehavior.parse(stream_behavior)
    rpc = match_rpc(line)
    if rpc is None:
        print(f"Warning: unrecognised rpc declaration, left unchanged: {line.strip()!r}", file=sys.stderr)
        return line
    return read_indentation(line).text + render_method(rpc, behavior)
