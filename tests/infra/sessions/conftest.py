from __future__ import annotations

import asyncio

import aiohttp
import aiohttp.web
import pytest_asyncio


@pytest_asyncio.fixture
async def test_server(aiohttp_server):
    async def handler_ok(request):
        return aiohttp.web.Response(text="hello", status=200)

    async def handler_echo(request):
        body = (await request.read()).decode("utf-8", errors="replace")
        return aiohttp.web.json_response(
            {
                "method": request.method,
                "query": request.rel_url.raw_query_string,
                "headers": {k.lower(): v for k, v in request.headers.items()},
                "body": body,
            }
        )

    async def handler_set_cookie(request):
        resp = aiohttp.web.Response(text="cookie!")
        resp.set_cookie("token", "abc123")
        return resp

    async def handler_set_cookies(request):
        resp = aiohttp.web.Response(text="cookies!")
        resp.headers.add("Set-Cookie", "a=1; Path=/")
        resp.headers.add("Set-Cookie", "bad=1; Domain=evil.com")
        resp.headers.add("Set-Cookie", "b=2; Path=/")
        return resp

    async def handler_numbered_cookie(request):
        n = request.match_info["n"]
        resp = aiohttp.web.Response(text=n)
        resp.headers.add("Set-Cookie", f"c{n}={n}; Path=/")
        return resp

    async def handler_api_cookie(request):
        resp = aiohttp.web.Response(text="api")
        resp.headers.add("Set-Cookie", "scoped=1; Path=/api")
        return resp

    async def handler_expire_cookie(request):
        resp = aiohttp.web.Response(text="bye")
        resp.headers.add(
            "Set-Cookie", "token=; Path=/; Expires=Thu, 01 Jan 1970 00:00:00 GMT"
        )
        return resp

    async def handler_echo_cookies(request):
        return aiohttp.web.json_response({"cookie": request.headers.get("Cookie")})

    async def handler_redirect(request):
        resp = aiohttp.web.Response(status=302, text="moved")
        resp.headers["Location"] = "/ok"
        resp.headers.add("Set-Cookie", "redirected=1; Path=/")
        return resp

    async def handler_latin(request):
        return aiohttp.web.Response(
            body="café".encode("latin-1"),
            content_type="text/plain",
            charset="latin-1",
        )

    async def handler_no_charset(request):
        return aiohttp.web.Response(
            body="café".encode(),
            content_type="application/octet-stream",
        )

    async def handler_not_found(request):
        return aiohttp.web.Response(status=404, text="missing")

    async def handler_slow(request):
        await asyncio.sleep(1.0)
        return aiohttp.web.Response(text="late")

    app = aiohttp.web.Application()
    app.router.add_get("/ok", handler_ok)
    app.router.add_route("*", "/echo", handler_echo)
    app.router.add_get("/set-cookie", handler_set_cookie)
    app.router.add_get("/set-cookies", handler_set_cookies)
    app.router.add_get("/numbered/{n}", handler_numbered_cookie)
    app.router.add_get("/api/set", handler_api_cookie)
    app.router.add_get("/expire-cookie", handler_expire_cookie)
    app.router.add_get("/echo-cookies", handler_echo_cookies)
    app.router.add_get("/api/echo-cookies", handler_echo_cookies)
    app.router.add_get("/redirect", handler_redirect)
    app.router.add_get("/latin", handler_latin)
    app.router.add_get("/no-charset", handler_no_charset)
    app.router.add_get("/not-found", handler_not_found)
    app.router.add_get("/slow", handler_slow)

    server = await aiohttp_server(app)
    return server
