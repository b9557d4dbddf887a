from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Union

# Marks a translated line that must not reach the output.
REMOVE = "--remove--"


class ProtoTsError(Exception):
    """Base class for errors raised by protoc_ts."""


class ConfigurationError(ProtoTsError):
    """Raised for invalid options or missing input, before translation starts."""


class SyntaxVersion(Enum):
    PROTO2 = "proto2"
    PROTO3 = "proto3"


class StreamBehavior(Enum):
    STRIP = "strip"
    NATIVE = "native"
    GENERIC = "generic"

    @classmethod
    def parse(cls, value: Union[str, StreamBehavior]) -> StreamBehavior:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        raise ConfigurationError(f'"{value}" is not a valid stream behaviour!')


class Cardinality(Enum):
    REQUIRED = auto()
    OPTIONAL = auto()
    REPEATED = auto()


class ScalarType(Enum):
    DOUBLE = "double"
    FLOAT = "float"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    SINT32 = "sint32"
    SINT64 = "sint64"
    FIXED32 = "fixed32"
    FIXED64 = "fixed64"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"


@dataclass(frozen=True)
class Indentation:
    width: int = 0
    char: str = ""

    @property
    def text(self) -> str:
        return self.char * self.width


@dataclass
class ParseContext:
    """Per-document state threaded through the line translator."""

    syntax: SyntaxVersion = SyntaxVersion.PROTO2
    package_declared: bool = False
    uses_stream: bool = False


@dataclass
class FieldDescriptor:
    name: str
    proto_type: str
    cardinality: Cardinality
    is_scalar: bool = False


@dataclass
class RpcDescriptor:
    method_name: str
    request_type: str
    response_type: str
    request_is_stream: bool = False
    response_is_stream: bool = False


@dataclass
class TranslateOptions:
    keep_comments: bool = False
    stream_behavior: StreamBehavior = StreamBehavior.NATIVE
    strip_empty_lines: bool = True

    def __post_init__(self):
        self.stream_behavior = StreamBehavior.parse(self.stream_behavior)


def _split_words(name: str) -> List[str]:
    # HTTPRequest -> HTTP Request, listFeatures -> list Features
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", name)
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", s)
    return [w for w in re.split(r"[\s_\-.]+", s) if w]


def to_pascal(name: str) -> str:
    """Convert a proto identifier to UpperCamelCase."""
    return "".join(w[:1].upper() + w[1:].lower() for w in _split_words(name))


def to_camel(name: str) -> str:
    """Convert a proto identifier to lowerCamelCase."""
    pascal = to_pascal(name)
    return pascal[:1].lower() + pascal[1:]
