"""Unit tests for the cookie codec and middleware."""

from __future__ import annotations

import pytest
from starlette.datastructures import Headers

from http_pipeline.middleware.cookies import host_only_set_cookie, serialize_cookie, wrap_cookies
from http_pipeline.models import Request, Response, ResponseCookie


class TestSerializeCookie:
    """Tests for serialize_cookie."""

    def test_value_and_path(self) -> None:
        assert serialize_cookie("session", ResponseCookie(value="abc")) == "session=abc; Path=/"

    def test_attributes(self) -> None:
        header = serialize_cookie(
            "session",
            ResponseCookie(value="abc", max_age=60, domain="example.com", secure=True, httponly=True),
        )

        assert header.startswith("session=abc")
        assert "Max-Age=60" in header
        assert "Domain=example.com" in header
        assert "Secure" in header
        assert "HttpOnly" in header


class TestHostOnlySetCookie:
    """Tests for host_only_set_cookie."""

    def test_removes_domain_and_secure(self) -> None:
        header = host_only_set_cookie("session=abc; Path=/app; Domain=upstream.local; Secure; HttpOnly; Max-Age=30")

        assert header == "session=abc; Path=/app; HttpOnly; Max-Age=30"

    def test_attribute_names_case_insensitive(self) -> None:
        assert host_only_set_cookie("id=1; DOMAIN=x.local; secure") == "id=1"

    def test_priority_stays_an_attribute(self) -> None:
        assert host_only_set_cookie("session=abc; Path=/; Priority=High") == "session=abc; Path=/; Priority=High"

    def test_partitioned_kept(self) -> None:
        header = host_only_set_cookie("__Host-id=1; Path=/; Secure; SameSite=None; Partitioned")

        assert header == "__Host-id=1; Path=/; SameSite=None; Partitioned"

    def test_base64_value_unchanged(self) -> None:
        assert host_only_set_cookie("token=YWJj/ZGVm==; HttpOnly") == "token=YWJj/ZGVm==; HttpOnly"

    def test_expires_with_comma_kept(self) -> None:
        header = host_only_set_cookie("id=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT; Domain=x.local")

        assert header == "id=1; Expires=Wed, 21 Oct 2026 07:28:00 GMT"

    def test_cookie_named_like_attribute_kept(self) -> None:
        """Only attributes are matched, never the name=value pair."""
        assert host_only_set_cookie("domain=example; Secure") == "domain=example"

    def test_empty_attributes_dropped(self) -> None:
        assert host_only_set_cookie("id=1;; Path=/;") == "id=1; Path=/"

class TestWrapCookies:
    """Tests for wrap_cookies."""

    @pytest.mark.asyncio
    async def test_parses_request_cookies(self) -> None:
        seen: list[Request] = []

        async def handler(request: Request) -> Response | None:
            seen.append(request)
            return Response(status=200)

        await wrap_cookies(handler)(Request(method="GET", path="/", headers={"cookie": "a=1; b=two"}))

        assert seen[0].cookies == {"a": "1", "b": "two"}

    @pytest.mark.asyncio
    async def test_writes_set_cookie_headers(self) -> None:
        async def handler(request: Request) -> Response | None:
            return Response(
                status=200,
                headers={"content-type": "text/plain"},
                cookies={"a": ResponseCookie(value="1"), "b": ResponseCookie(value="2", httponly=True)},
            )

        response = await wrap_cookies(handler)(Request(method="GET", path="/"))

        assert response is not None
        assert response.cookies == {}
        assert response.headers["content-type"] == "text/plain"
        set_cookies = response.headers.getlist("set-cookie")
        assert "a=1; Path=/" in set_cookies
        assert any(value.startswith("b=2") and "HttpOnly" in value for value in set_cookies)

    @pytest.mark.asyncio
    async def test_response_without_cookies_unchanged(self, ok_handler) -> None:
        request = Request(method="GET", path="/")

        response = await wrap_cookies(ok_handler)(request)

        assert response == await ok_handler(request)

    @pytest.mark.asyncio
    async def test_none_response_propagates(self, none_handler) -> None:
        assert await wrap_cookies(none_handler)(Request(method="GET", path="/")) is None

    @pytest.mark.asyncio
    async def test_existing_set_cookie_headers_kept(self) -> None:
        """Set-Cookie headers already on the response survive next to new cookies."""

        async def handler(request: Request) -> Response | None:
            return Response(
                status=200,
                headers=Headers(raw=[(b"set-cookie", b"session=YWJj/ZGVm==; Path=/; Priority=High")]),
                cookies={"theme": ResponseCookie(value="dark")},
            )

        response = await wrap_cookies(handler)(Request(method="GET", path="/"))

        assert response is not None
        assert response.headers.getlist("set-cookie") == [
            "session=YWJj/ZGVm==; Path=/; Priority=High",
            "theme=dark; Path=/",
        ]
