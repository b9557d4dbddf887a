from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from protoc_ts.document import parse
from protoc_ts.models import ConfigurationError, ProtoTsError, StreamBehavior, TranslateOptions


def _ensure_output_dir(path: str) -> None:
    """Create the output directory for a multi-file run."""
    if os.path.exists(path) and not os.path.isdir(path):
        raise ConfigurationError(
            f"{path} exists and is not a directory, but multiple input files were given"
        )
    os.makedirs(path, exist_ok=True)


def run(files: List[str], output: Optional[str], options: TranslateOptions) -> List[str]:
    """Translate each file, printing or writing the results.

    Returns the list of written file paths (empty when printing to stdout).
    """
    if not files:
        raise ConfigurationError("No file specified")

    # Each file gets its own translation context
    results = [(f, parse(f, options)) for f in files]

    if len(results) == 1:
        _, result = results[0]
        if output is None:
            print(result.to_string())
            return []
        written = result.to_file(output)
        print("Done!")
        return [written]

    if output is None:
        for f, result in results:
            print(f"// ----- {f} -----\n")
            print(result.to_string())
        return []

    _ensure_output_dir(output)
    generated: List[str] = []
    for f, result in results:
        out_path = os.path.join(output, f"{Path(f).stem}.ts")
        generated.append(result.to_file(out_path))
    print("Done!")
    return generated


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="protoc-ts",
        description="Convert .proto files into TypeScript interface declarations",
    )
    parser.add_argument("files", nargs="+", help="File name(s) to parse")
    parser.add_argument(
        "-c", "--keep-comments",
        action="store_true",
        help="Keep comment lines",
    )
    parser.add_argument(
        "-s", "--stream-behavior",
        choices=[b.value for b in StreamBehavior],
        default=StreamBehavior.NATIVE.value,
        help="How to convert streams (default: native)",
    )
    parser.add_argument(
        "-e", "--keep-empty-lines",
        action="store_true",
        help="Keep empty lines",
    )
    parser.add_argument(
        "-o", "--output",
        help="Path of the generated output (a directory if more than one file is given); prints to stdout when omitted",
    )
    args = parser.parse_args(argv)

    try:
        options = TranslateOptions(
            keep_comments=args.keep_comments,
            stream_behavior=args.stream_behavior,
            strip_empty_lines=not args.keep_empty_lines,
        )
        run(args.files, args.output, options)
    except (ProtoTsError, OSError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
