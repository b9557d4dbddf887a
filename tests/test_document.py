import io

import pytest

from protoc_ts.document import (
    ParsedInterface,
    detect_syntax,
    parse,
    read_source,
    strip_statements,
    translate_document,
)
from protoc_ts.models import REMOVE, ConfigurationError, SyntaxVersion, TranslateOptions

ROUTE_GUIDE = """\
syntax = "proto3";

option java_package = "io.grpc.examples.routeguide";

package routeguide;

// Interface exported by the server.
service RouteGuide {
  // Obtains the feature at a given position.
  rpc GetFeature(Point) returns (Feature) {}
  rpc ListFeatures(Rectangle) returns (stream Feature) {}
  rpc RecordRoute(stream Point) returns (RouteSummary) {}
  rpc RouteChat(stream RouteNote) returns (stream RouteNote) {}
}

message Point {
  int32 latitude = 1;
  int32 longitude = 2;
}

message RouteNote {
  Point location = 1;
  repeated string message = 2;
}
"""

ADDRESS_BOOK = """\
package tutorial;

message Person {
    required string name = 1;
    optional int32 id = 2;
    string email = 3;
    repeated PhoneNumber phones = 4;
}
"""

NO_PACKAGE = """\
syntax = "proto3";

message Point {
  int32 latitude = 1;
}

service Geo {
  rpc Locate(Point) returns (Point) {}
}
"""


class TestDetectSyntax:
    def test_proto3(self):
        assert detect_syntax(ROUTE_GUIDE) is SyntaxVersion.PROTO3

    def test_single_quotes(self):
        assert detect_syntax("syntax = 'proto3';\n") is SyntaxVersion.PROTO3

    def test_defaults_to_proto2(self):
        assert detect_syntax(ADDRESS_BOOK) is SyntaxVersion.PROTO2
        assert detect_syntax('syntax = "proto2";') is SyntaxVersion.PROTO2


class TestStripStatements:
    def test_syntax_and_option_lines_are_removed(self):
        lines = strip_statements(ROUTE_GUIDE)
        assert lines[0] == REMOVE
        assert lines[2] == REMOVE
        assert lines[4] == "package routeguide;"

    def test_optional_fields_are_kept(self):
        assert strip_statements("  optional int32 id = 2;") == ["  optional int32 id = 2;"]


class TestTranslateDocument:
    def test_default_options(self):
        expected = """\
import Stream from 'stream'

export namespace Routeguide {
  export interface RouteGuideService {
    getFeature (point: Point): Feature
    listFeatures (rectangle: Rectangle): Stream
    recordRoute (pointStream: Stream): RouteSummary
    routeChat (routeNoteStream: Stream): Stream
  }
  export interface Point {
    latitude?: number
    longitude?: number
  }
  export interface RouteNote {
    location?: Point
    message: string[]
  }
}"""
        assert translate_document(ROUTE_GUIDE) == expected

    def test_generic_streams(self):
        output = translate_document(ROUTE_GUIDE, TranslateOptions(stream_behavior="generic"))
        lines = output.split("\n")
        assert lines[0] == "import Stream from 'ts-stream'"
        assert lines[1] == ""
        assert "    listFeatures (rectangle: Rectangle): Stream<Feature>" in lines
        assert "    routeChat (routeNoteStream: Stream<RouteNote>): Stream<RouteNote>" in lines

    def test_strip_streams(self):
        output = translate_document(ROUTE_GUIDE, TranslateOptions(stream_behavior="strip"))
        assert "import Stream" not in output
        assert "Stream" not in output
        assert "    recordRoute (point: Point): RouteSummary" in output.split("\n")

    def test_no_stream_import_without_streaming_rpcs(self):
        output = translate_document(NO_PACKAGE)
        assert not output.startswith("import")

    def test_proto2_cardinality(self):
        expected = """\
export namespace Tutorial {
    export interface Person {
        name: string
        id?: number
        email: string
        phones: PhoneNumber[]
    }
}"""
        assert translate_document(ADDRESS_BOOK) == expected

    def test_no_package_means_no_namespace(self):
        expected = """\
export interface Point {
  latitude?: number
}
export interface Geo {
  locate (point: Point): Point
}"""
        assert translate_document(NO_PACKAGE) == expected

    def test_package_wraps_exactly_once(self):
        lines = translate_document(ROUTE_GUIDE).split("\n")
        assert sum(1 for line in lines if line.startswith("export namespace")) == 1
        assert lines[-1] == "}"
        assert sum(1 for line in lines if line.strip().startswith("export interface")) + 1 == (
            sum(1 for line in lines if line.strip() == "}")
        )

    def test_tab_indentation_is_reused(self):
        text = "package shop;\nmessage Item {\n\tstring sku = 1;\n}\n"
        assert translate_document(text) == (
            "export namespace Shop {\n\texport interface Item {\n\t\tsku: string\n\t}\n}"
        )

    def test_empty_message_keeps_braces_balanced(self):
        text = "syntax = \"proto3\";\nmessage Empty {}\nmessage A {\n  string n = 1;\n}\n"
        output = translate_document(text)
        assert output == "export interface Empty {}\nexport interface A {\n  n?: string\n}"
        assert output.count("{") == output.count("}")

    def test_deterministic(self):
        options = TranslateOptions(keep_comments=True, stream_behavior="generic")
        assert translate_document(ROUTE_GUIDE, options) == translate_document(ROUTE_GUIDE, options)


class TestLineFiltering:
    def test_keep_comments_only_adds_comment_lines(self):
        default = translate_document(ROUTE_GUIDE).split("\n")
        with_comments = translate_document(ROUTE_GUIDE, TranslateOptions(keep_comments=True)).split("\n")
        assert "  // Interface exported by the server." in with_comments
        assert "    // Obtains the feature at a given position." in with_comments
        assert [line for line in with_comments if not line.strip().startswith("//")] == default

    def test_keep_empty_lines_only_adds_blank_lines(self):
        default = translate_document(ROUTE_GUIDE).split("\n")
        with_blanks = translate_document(ROUTE_GUIDE, TranslateOptions(strip_empty_lines=False)).split("\n")
        assert len(with_blanks) > len(default)
        assert [line for line in with_blanks if line] == [line for line in default if line]

    def test_statement_lines_never_appear(self):
        output = translate_document(ROUTE_GUIDE, TranslateOptions(keep_comments=True, strip_empty_lines=False))
        assert "syntax" not in output
        assert "java_package" not in output


class TestIndependentDocuments:
    def test_state_does_not_leak_between_documents(self):
        first = translate_document(ROUTE_GUIDE)
        second = translate_document("message Person {\n  string name = 1;\n}\n")
        assert "namespace" in first
        assert second == "export interface Person {\n  name: string\n}"

    def test_service_suffix_depends_on_own_document(self):
        translate_document(ROUTE_GUIDE)
        assert "export interface Geo {" in translate_document(NO_PACKAGE)


class TestReadSource:
    def test_text(self):
        assert read_source(NO_PACKAGE) == NO_PACKAGE

    def test_bytes(self):
        assert read_source(NO_PACKAGE.encode("utf-8")) == NO_PACKAGE

    def test_text_and_binary_streams(self):
        assert read_source(io.StringIO(NO_PACKAGE)) == NO_PACKAGE
        assert read_source(io.BytesIO(NO_PACKAGE.encode("utf-8"))) == NO_PACKAGE

    def test_file_path(self, tmp_path):
        proto_path = tmp_path / "geo.proto"
        proto_path.write_text(NO_PACKAGE, encoding="utf-8")
        assert read_source(str(proto_path)) == NO_PACKAGE
        assert read_source(proto_path) == NO_PACKAGE

    def test_byte_order_mark_is_dropped(self, tmp_path):
        proto_path = tmp_path / "bom.proto"
        proto_path.write_bytes(b"\xef\xbb\xbf" + NO_PACKAGE.encode("utf-8"))
        assert read_source(str(proto_path)) == NO_PACKAGE
        assert read_source(proto_path) == NO_PACKAGE
        assert read_source(proto_path.read_bytes()) == NO_PACKAGE
        assert read_source(io.BytesIO(proto_path.read_bytes())) == NO_PACKAGE

    def test_missing_file_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_source(str(tmp_path / "missing.proto"))

    @pytest.mark.parametrize("source", [None, "", b""])
    def test_no_input(self, source):
        with pytest.raises(ConfigurationError, match="No file specified"):
            read_source(source)


class TestParse:
    def test_parse_returns_interface(self):
        result = parse(NO_PACKAGE)
        assert isinstance(result, ParsedInterface)
        assert str(result) == result.to_string() == translate_document(NO_PACKAGE)

    def test_option_keywords(self):
        result = parse(ROUTE_GUIDE, stream_behavior="strip", keep_comments=True)
        assert "// Obtains the feature" in result.to_string()
        assert "import Stream" not in result.to_string()

    def test_invalid_behavior_rejected_before_reading(self, tmp_path):
        with pytest.raises(ConfigurationError):
            parse(str(tmp_path / "missing.proto"), stream_behavior="bogus")

    def test_options_and_keywords_are_exclusive(self):
        with pytest.raises(ConfigurationError):
            parse(NO_PACKAGE, TranslateOptions(), keep_comments=True)

    def test_to_file(self, tmp_path):
        out_path = tmp_path / "geo.ts"
        written = parse(NO_PACKAGE).to_file(out_path)
        assert written == str(out_path)
        assert out_path.read_text(encoding="utf-8") == translate_document(NO_PACKAGE)

    def test_byte_order_mark_keeps_proto3_semantics(self, tmp_path):
        proto_path = tmp_path / "bom.proto"
        proto_path.write_bytes(b'\xef\xbb\xbfsyntax = "proto3";\nmessage A {\n  string name = 1;\n}\n')
        assert parse(str(proto_path)).to_string() == "export interface A {\n  name?: string\n}"
