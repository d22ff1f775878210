"""Tests for path segment helpers and canonical route shapes."""

from zerodeploy.detection.paths import (
    DynamicSegment,
    LiteralSegment,
    RouteShape,
    escape_regex,
    find_repeated_segment,
    is_private_segment,
    join_paths_readable,
    segment_name,
    split_extension,
    split_path,
)


class TestSegments:
    def test_split_path_drops_empty_segments(self):
        assert split_path("api//users/[id].js") == ["api", "users", "[id].js"]
        assert split_path("") == []

    def test_split_extension(self):
        assert split_extension("date.js") == ("date", ".js")
        assert split_extension("index.d.ts") == ("index.d", ".ts")
        assert split_extension(".helper") == (".helper", "")

    def test_segment_name(self):
        assert segment_name("[id].js") == "id"
        assert segment_name("[team]") == "team"
        assert segment_name("users") is None
        assert segment_name("[]") is None
        assert segment_name("[id]x.js") is None

    def test_private_segments(self):
        assert is_private_segment("_utils")
        assert is_private_segment(".helper.js")
        assert not is_private_segment("users")


class TestEscapeRegex:
    def test_escapes_metacharacters(self):
        assert escape_regex("date.js") == r"date\.js"
        assert escape_regex("a+b(c)") == r"a\+b\(c\)"

    def test_leaves_dashes_and_slashes(self):
        assert escape_regex("my-endpoint") == "my-endpoint"
        assert escape_regex("a/b") == "a/b"


class TestRepeatedSegment:
    def test_repeated_name(self):
        assert find_repeated_segment("api/[team]/[team].js") == "team"

    def test_distinct_names(self):
        assert find_repeated_segment("api/[team]/[id].js") is None
        assert find_repeated_segment("api/users/users.js") is None


class TestJoinPathsReadable:
    def test_one(self):
        assert join_paths_readable(["a"]) == '"a"'

    def test_two(self):
        assert join_paths_readable(["a", "b"]) == '"a" and "b"'

    def test_three(self):
        assert join_paths_readable(["a", "b", "c"]) == '"a", "b", and "c"'


class TestRouteShape:
    """Equal shapes mean two files answer the same requests."""

    def test_extension_is_ignored(self):
        assert RouteShape.from_path("api/user.go") == RouteShape.from_path(
            "api/user.js"
        )

    def test_dynamic_names_are_ignored(self):
        a = RouteShape.from_path("api/[id].js")
        b = RouteShape.from_path("api/[slug].py")
        assert a == b
        assert hash(a) == hash(b)
        assert a.names == ("id",)
        assert b.names == ("slug",)

    def test_index_folds_into_parent(self):
        shape = RouteShape.from_path("api/date/index.js")
        assert shape.segments == (LiteralSegment("api"), LiteralSegment("date"))
        assert shape.is_index

    def test_index_differs_from_sibling_file(self):
        assert RouteShape.from_path("api/date/index.js") != RouteShape.from_path(
            "api/date.js"
        )

    def test_dynamic_count(self):
        shape = RouteShape.from_path("api/[team]/[id]/index.ts")
        assert shape.dynamic_count == 2
        assert isinstance(shape.segments[1], DynamicSegment)
        assert shape.is_index
