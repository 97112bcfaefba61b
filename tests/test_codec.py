"""Tests for drips.routing.codec — template compilation, matching and rendering."""

import pytest

from drips.errors import ConfigurationError, MalformedTemplate
from drips.routing.codec import (
    compile_template,
    is_absolute_url,
    join_root,
    match_path,
    normalize_path,
    render_template,
)
from drips.routing.route import TemplateKind


def _match(template: str, path: str, patterns: dict[str, str] | None = None):
    return match_path(compile_template(template, patterns), path)


class TestNormalizePath:
    def test_strips_separators(self) -> None:
        assert normalize_path("/users/") == "users"

    def test_root(self) -> None:
        assert normalize_path("/") == ""
        assert normalize_path("") == ""

    def test_inner_separators_kept(self) -> None:
        assert normalize_path("//a/b//") == "a/b"


class TestCompileKinds:
    def test_root_is_literal(self) -> None:
        compiled = compile_template("/")
        assert compiled.kind is TemplateKind.LITERAL
        assert compiled.tokens == ()

    def test_literal(self) -> None:
        assert compile_template("/users/list").kind is TemplateKind.LITERAL

    def test_placeholder(self) -> None:
        compiled = compile_template("/users/{name}")
        assert compiled.kind is TemplateKind.PLACEHOLDER
        assert compiled.tokens == ("name",)

    def test_raw_pattern(self) -> None:
        assert compile_template("/test/(a|b|c)").kind is TemplateKind.RAW_PATTERN

    def test_auto_prefix(self) -> None:
        assert compile_template("/docs/[auto]").kind is TemplateKind.AUTO_PREFIX

    def test_source_kept(self) -> None:
        assert compile_template("/users/{name}/").source == "/users/{name}/"


class TestTokens:
    def test_order_of_appearance(self) -> None:
        assert compile_template("/test/{b}/{a}").tokens == ("b", "a")

    def test_hyphenated_token(self) -> None:
        assert compile_template("/users/{user-id}").tokens == ("user-id",)

    def test_repeated_token_listed_once(self) -> None:
        compiled = compile_template("/{a}/{a}")
        assert compiled.tokens == ("a",)
        assert match_path(compiled, "/x/y") == ("x", "y")

    def test_numeric_quantifier_is_not_a_token(self) -> None:
        compiled = compile_template(r"/year/\d{4}")
        assert compiled.tokens == ()
        assert compiled.kind is TemplateKind.RAW_PATTERN
        assert match_path(compiled, "/year/2024") == ()
        assert match_path(compiled, "/year/24") is None


class TestLiteralMatching:
    def test_root_matches_empty_path(self) -> None:
        assert _match("/", "") == ()
        assert _match("/", "/") == ()

    def test_root_rejects_other_paths(self) -> None:
        assert _match("/", "/das/ist/sicher/nicht/home") is None

    def test_exact(self) -> None:
        assert _match("/users", "/users") == ()

    def test_trailing_separator(self) -> None:
        assert _match("/users", "/users/") == ()

    def test_sub_path_rejected(self) -> None:
        assert _match("/users", "/users/extra") is None
        assert _match("/test", "/test/falsch") is None

    def test_super_path_rejected(self) -> None:
        assert _match("/users/list", "/users") is None


class TestPlaceholderMatching:
    def test_single(self) -> None:
        assert _match("/users/{username}", "/users/asdf") == ("asdf",)

    def test_digits(self) -> None:
        assert _match("/users/{username}", "/users/123") == ("123",)

    def test_missing_segment(self) -> None:
        assert _match("/users/{username}", "/users") is None
        assert _match("/users/{username}", "/users/") is None

    def test_multi_token_order(self) -> None:
        assert _match("/test/{a}/{b}", "/test/x/y") == ("x", "y")

    @pytest.mark.parametrize("path", ["/de/home", "/de/home/", "de/home/", "de/home"])
    def test_leading_token(self, path: str) -> None:
        assert _match("/{lang}/home", path) == ("de",)

    def test_default_pattern_rejects_dots(self) -> None:
        assert _match("/files/{name}", "/files/a.txt") is None

    def test_default_pattern_accepts_hyphens(self) -> None:
        assert _match("/posts/{slug}", "/posts/hello-world") == ("hello-world",)


class TestCustomPatterns:
    def test_restricts_matching(self) -> None:
        patterns = {"name": "[A-Z]+"}
        assert _match("/users/{name}", "/users/admin", patterns) is None
        assert _match("/users/{name}", "/users/ADMIN", patterns) == ("ADMIN",)

    def test_grouped_pattern_used_verbatim(self) -> None:
        compiled = compile_template("/users/{name}", {"name": "([a-z]+)"})
        assert compiled.pattern.groups == 1
        assert match_path(compiled, "/users/admin") == ("admin",)

    def test_pattern_with_dots(self) -> None:
        assert _match("/files/{name}", "/files/a.txt", {"name": r"[\w.]+"}) == ("a.txt",)

    def test_pattern_for_unknown_token_ignored(self) -> None:
        assert _match("/users/{name}", "/users/bob", {"other": r"\d+"}) == ("bob",)

    def test_custom_default(self) -> None:
        compiled = compile_template("/n/{id}", default=r"\d+")
        assert match_path(compiled, "/n/42") == ("42",)
        assert match_path(compiled, "/n/x") is None


class TestRawPatterns:
    @pytest.mark.parametrize("letter", ["a", "b", "c"])
    def test_alternation(self, letter: str) -> None:
        assert _match("/test/(a|b|c)", f"/test/{letter}") == (letter,)

    def test_alternation_miss(self) -> None:
        assert _match("/test/(a|b|c)", "/test/d") is None

    def test_optional_group_becomes_empty_string(self) -> None:
        assert _match("/page(/[0-9]+)?", "/page") == ("",)


class TestAutoPrefix:
    def test_remaining_segments(self) -> None:
        assert _match("/docs/[auto]", "/docs/api/v2/index") == ("api", "v2", "index")

    def test_exact_prefix(self) -> None:
        assert _match("/docs/[auto]", "/docs") == ()
        assert _match("/docs/[auto]", "/docs/") == ()

    def test_other_prefix(self) -> None:
        assert _match("/docs/[auto]", "/blog/post") is None

    @pytest.mark.parametrize("path", ["/docsearch", "/docs-old/a", "/documents"])
    def test_prefix_ends_on_segment_boundary(self, path: str) -> None:
        assert _match("/docs/[auto]", path) is None

    def test_token_prefix_ends_on_segment_boundary(self) -> None:
        assert _match("/v{n}/[auto]", "/v2x/a", {"n": r"\d"}) is None
        assert _match("/v{n}/[auto]", "/v2/a", {"n": r"\d"}) == ("2", "a")

    def test_segments_not_validated(self) -> None:
        assert _match("/docs/[auto]", "/docs/a.b/c d") == ("a.b", "c d")

    def test_root_catch_all(self) -> None:
        assert _match("[auto]", "/a/b") == ("a", "b")
        assert _match("[auto]", "/") == ()

    def test_prefix_tokens_come_first(self) -> None:
        assert _match("/{lang}/[auto]", "/de/x/y") == ("de", "x", "y")

    def test_custom_marker(self) -> None:
        compiled = compile_template("/docs/*", auto_marker="*")
        assert compiled.kind is TemplateKind.AUTO_PREFIX
        assert match_path(compiled, "/docs/a") == ("a",)


class TestMalformed:
    def test_bad_raw_pattern(self) -> None:
        with pytest.raises(MalformedTemplate) as exc_info:
            compile_template("/users/(")
        assert exc_info.value.template == "/users/("

    def test_bad_token_pattern(self) -> None:
        with pytest.raises(MalformedTemplate) as exc_info:
            compile_template("/users/{name}", {"name": "[a-"})
        assert "{name}" in str(exc_info.value)

    def test_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_template("/(")


class TestRenderTemplate:
    def test_substitution(self) -> None:
        assert render_template("/users/{name}", {"name": "Loas"}) == "users/Loas"

    def test_inner_token(self) -> None:
        assert render_template("/users/{name}/dashboard", {"name": "Loas"}) == "users/Loas/dashboard"

    def test_no_tokens(self) -> None:
        assert render_template("/messages") == "messages"

    def test_unfilled_tokens_dropped(self) -> None:
        assert render_template("/test/{a}/{b}", {"a": "x"}) == "test/x/"

    def test_every_occurrence_replaced(self) -> None:
        assert render_template("/{a}/{a}", {"a": "x"}) == "x/x"

    def test_values_not_escaped(self) -> None:
        assert render_template("/q/{term}", {"term": "a b&c"}) == "q/a b&c"

    def test_non_string_values(self) -> None:
        assert render_template("/posts/{id}", {"id": 42}) == "posts/42"

    def test_extra_params_ignored(self) -> None:
        assert render_template("/users", {"name": "x"}) == "users"

    def test_auto_marker_dropped(self) -> None:
        assert render_template("/docs/[auto]") == "docs/"


class TestAbsoluteUrl:
    @pytest.mark.parametrize("url", ["https://example.com", "http://example.com/a?b=1"])
    def test_absolute(self, url: str) -> None:
        assert is_absolute_url(url) is True

    @pytest.mark.parametrize("url", ["/users", "users", "example.com/x", "mailto:someone", ""])
    def test_not_absolute(self, url: str) -> None:
        assert is_absolute_url(url) is False


class TestJoinRoot:
    def test_root(self) -> None:
        assert join_root("/", "users/Loas") == "/users/Loas"

    def test_prefix(self) -> None:
        assert join_root("/app/", "images/rei.jpg") == "/app/images/rei.jpg"

    def test_collapses_separators(self) -> None:
        assert join_root("/app/", "/a//b///c") == "/app/a/b/c"

    def test_absolute_url_unchanged(self) -> None:
        assert join_root("/app/", "https://example.com//x") == "https://example.com//x"
