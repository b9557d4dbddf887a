"""Render TypeScript declaration lines from the declarations.ts.j2 macros."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from protoc_ts.generator.type_mapper import map_scalar_type
from protoc_ts.models import Cardinality, FieldDescriptor, RpcDescriptor, StreamBehavior, to_camel

# Module imported by the emitted code for each stream behaviour
STREAM_MODULES = {
    StreamBehavior.NATIVE: "stream",
    StreamBehavior.GENERIC: "ts-stream",
}


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


@lru_cache(maxsize=None)
def _macros():
    return _get_template_env().get_template("declarations.ts.j2").module


def render_interface_open(name: str) -> str:
    return _macros().interface_open(name)


def render_namespace_open(name: str) -> str:
    return _macros().namespace_open(name)


def render_block_close() -> str:
    return _macros().block_close()


def render_field(field: FieldDescriptor) -> str:
    """Render `name?: type[]` for a field; repeated fields are never optional."""
    return _macros().field(
        to_camel(field.name),
        map_scalar_type(field.proto_type),
        field.cardinality is Cardinality.OPTIONAL,
        field.cardinality is Cardinality.REPEATED,
    )


def render_stream_type(type_name: str, is_stream: bool, behavior: StreamBehavior) -> str:
    if not is_stream or behavior is StreamBehavior.STRIP:
        return type_name
    return _macros().stream_type(type_name, behavior is StreamBehavior.GENERIC)


def render_method(rpc: RpcDescriptor, behavior: StreamBehavior) -> str:
    param_name = to_camel(rpc.request_type)
    if rpc.request_is_stream and behavior is not StreamBehavior.STRIP:
        param_name += "Stream"
    return _macros().method(
        to_camel(rpc.method_name),
        param_name,
        render_stream_type(rpc.request_type, rpc.request_is_stream, behavior),
        render_stream_type(rpc.response_type, rpc.response_is_stream, behavior),
    )


def render_stream_import(behavior: StreamBehavior) -> str:
    return _macros().stream_import(STREAM_MODULES[behavior])
