"""Unit tests for proxy path matching."""

from __future__ import annotations

import re

import pytest

from http_pipeline.proxy.matcher import compile_matcher, path_matches, remote_path


class TestPrefixMatching:
    """A string matcher covers paths under prefix + "/"."""

    @pytest.mark.parametrize("path", ["/proxy/", "/proxy/abc", "/proxy/a/b/c"])
    def test_matches_paths_under_prefix(self, path: str) -> None:
        assert path_matches(compile_matcher("/proxy"), path)

    @pytest.mark.parametrize("path", ["/proxy", "/proxyother", "/other/proxy/abc", "/"])
    def test_rejects_other_paths(self, path: str) -> None:
        assert not path_matches(compile_matcher("/proxy"), path)

    def test_remote_path_strips_prefix(self) -> None:
        assert remote_path("/proxy", "/proxy/a/b") == "/a/b"


class TestPatternMatching:
    """A pattern matcher is anchored to the start of the path."""

    def test_anchors_pattern(self) -> None:
        matcher = compile_matcher(re.compile(r"/api/v\d+"))

        assert isinstance(matcher, re.Pattern)
        assert matcher.pattern == r"^/api/v\d+"

    def test_keeps_flags(self) -> None:
        matcher = compile_matcher(re.compile("/api", re.IGNORECASE))

        assert path_matches(matcher, "/API/x")

    def test_matches_at_start_only(self) -> None:
        matcher = compile_matcher(re.compile(r"/api/v\d+"))

        assert path_matches(matcher, "/api/v2/users")
        assert not path_matches(matcher, "/web/api/v2/users")

    def test_search_not_fullmatch(self) -> None:
        """The pattern need only cover a prefix of the path."""
        assert path_matches(compile_matcher(re.compile("/a")), "/abc/def")

    def test_remote_path_keeps_full_path(self) -> None:
        matcher = compile_matcher(re.compile(r"/api/v\d+"))

        assert remote_path(matcher, "/api/v2/users") == "/api/v2/users"


class TestCompileMatcher:
    """Tests for compile_matcher."""

    def test_string_unchanged(self) -> None:
        assert compile_matcher("/proxy") == "/proxy"

    def test_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            compile_matcher(42)  # type: ignore[arg-type]
