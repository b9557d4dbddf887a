from __future__ import annotations

from typing import Dict

from protoc_ts.models import ScalarType

# Proto scalar type -> TypeScript primitive
PRIMITIVE_TYPE_MAP: Dict[ScalarType, str] = {
    ScalarType.DOUBLE: "number",
    ScalarType.FLOAT: "number",
    ScalarType.INT32: "number",
    ScalarType.INT64: "number",
    ScalarType.UINT32: "number",
    ScalarType.UINT64: "number",
    ScalarType.SINT32: "number",
    ScalarType.SINT64: "number",
    ScalarType.FIXED32: "number",
    ScalarType.FIXED64: "number",
    ScalarType.SFIXED32: "number",
    ScalarType.SFIXED64: "number",
    ScalarType.BOOL: "boolean",
    ScalarType.STRING: "string",
    ScalarType.BYTES: "string",
}

_SCALARS_BY_NAME: Dict[str, ScalarType] = {s.value: s for s in ScalarType}


def is_scalar(proto_type_name: str) -> bool:
    return proto_type_name in _SCALARS_BY_NAME


def map_scalar_type(proto_type_name: str) -> str:
    """Map a proto scalar type to its TypeScript primitive.

    Names outside the scalar set are references to user-defined messages or
    enums and are returned unchanged.
    """
    scalar = _SCALARS_BY_NAME.get(proto_type_name)
    if scalar is None:
        return proto_type_name
    return PRIMITIVE_TYPE_MAP[scalar]
