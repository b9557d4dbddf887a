from __future__ import annotations

import re
from typing import Dict, Optional

from protoc_ts.generator.type_mapper import is_scalar
from protoc_ts.models import Cardinality, FieldDescriptor, SyntaxVersion

CARDINALITY_KEYWORDS: Dict[str, Cardinality] = {
    "required": Cardinality.REQUIRED,
    "optional": Cardinality.OPTIONAL,
    "repeated": Cardinality.REPEATED,
}

# [label] Type name = number ...
_FIELD_RE = re.compile(
    r"^\s*(?:(?P<label>required|optional|repeated)\s+)?"
    r"(?P<type>[\w.]+)\s+(?P<name>\w+)\s*=\s*\d+"
)


def default_cardinality(syntax: SyntaxVersion) -> Cardinality:
    """proto3 fields are implicitly optional, proto2 fields implicitly required."""
    if syntax is SyntaxVersion.PROTO3:
        return Cardinality.OPTIONAL
    return Cardinality.REQUIRED


def parse_field(line: str, syntax: SyntaxVersion) -> Optional[FieldDescriptor]:
    """Parse a field declaration line, or return None if it isn't one."""
    match = _FIELD_RE.match(line)
    if not match:
        return None
    label = match.group("label")
    cardinality = CARDINALITY_KEYWORDS[label] if label else default_cardinality(syntax)
    proto_type = match.group("type")
    return FieldDescriptor(
        name=match.group("name"),
        proto_type=proto_type,
        cardinality=cardinality,
        is_scalar=is_scalar(proto_type),
    )
