"""Whitespace tokenizer for single lines of a .proto file."""

from __future__ import annotations

from typing import List

from protoc_ts.models import Indentation


def tokenize(line: str) -> List[str]:
    """Split a line into its non-empty whitespace-separated tokens."""
    return line.split()


def read_indentation(line: str) -> Indentation:
    """Measure the leading whitespace of a line.

    Records the first indentation character so emitted lines can reproduce
    the source's indentation style (tabs or spaces).
    """
    stripped = line.lstrip(" \t")
    width = len(line) - len(stripped)
    if width == 0 or not stripped:
        return Indentation()
    return Indentation(width=width, char=line[0])
