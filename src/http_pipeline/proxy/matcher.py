"""Path matching for proxy rules.

A rule's matcher is either a literal prefix or a regular expression:

- Prefix "/foo" matches "/foo/..." but not "/foo" or "/foobar": the request
  path must start with the prefix followed by "/".
- A pattern is anchored to the start of the path once, when the matcher is
  built, and then searched for in the path (not full-matched).
"""

from __future__ import annotations

__all__ = [
    "PathMatcher",
    "compile_matcher",
    "path_matches",
    "remote_path",
]

import re

PathMatcher = str | re.Pattern[str]


def compile_matcher(proxied_path: PathMatcher) -> PathMatcher:
    """Normalize a matcher: patterns get a start-of-string anchor, strings are unchanged.

    Args:
        proxied_path: Literal prefix or compiled pattern.

    Returns:
        The matcher to use with path_matches.

    Raises:
        TypeError: If proxied_path is neither a string nor a pattern.
    """
    if isinstance(proxied_path, re.Pattern):
        return re.compile("^" + proxied_path.pattern, proxied_path.flags)
    if isinstance(proxied_path, str):
        return proxied_path
    raise TypeError(f"proxied_path must be a str or re.Pattern, got {type(proxied_path).__name__}")


def path_matches(matcher: PathMatcher, path: str) -> bool:
    """Check if a request path is covered by a compiled matcher."""
    if isinstance(matcher, str):
        return path.startswith(matcher + "/")
    return matcher.search(path) is not None


def remote_path(matcher: PathMatcher, path: str) -> str:
    """Path to append to the remote base URI for a matched request.

    A prefix rule strips the prefix ("/proxy/a/b" -> "/a/b"); a pattern rule
    forwards the whole path, since a pattern does not define what to strip.
    """
    if isinstance(matcher, str):
        return path[len(matcher):]
    return path
