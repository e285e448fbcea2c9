import pytest

from jarhttp.infra.sessions.response import BaseResponse, Headers

# ---------------------------------------------------------
# Headers tests
# ---------------------------------------------------------


def test_headers_init_from_mapping():
    h = Headers({"Content-Type": "text/html", "X-Test": "1"})
    assert h["content-type"] == "text/html"
    assert "Content-Type" in h
    assert h.get_all("X-TEST") == ["1"]


def test_headers_sequence_keeps_repeated_fields():
    h = Headers([("Set-Cookie", "a=1"), ("set-cookie", "b=2"), ("X-Test", "1")])
    assert h.get_all("set-cookie") == ["a=1", "b=2"]
    assert h["Set-Cookie"] == "a=1"
    assert len(h) == 2


def test_headers_get_all_returns_copy():
    h = Headers([("Set-Cookie", "a=1")])
    h.get_all("set-cookie").append("b=2")
    assert h.get_all("set-cookie") == ["a=1"]


def test_headers_missing_field():
    h = Headers()
    assert h.get_all("set-cookie") == []
    assert h.get("set-cookie") is None
    with pytest.raises(KeyError):
        _ = h["missing"]


def test_headers_setitem_overwrites_and_delete():
    h = Headers()
    h.add("X-Test", "a")
    h.add("X-Test", "b")
    h["X-Test"] = "final"
    assert h.get_all("x-test") == ["final"]

    del h["x-test"]
    assert "x-test" not in h


def test_headers_contains_non_string():
    h = Headers({"A": "1"})
    assert (123 in h) is False
    assert (None in h) is False


def test_headers_repr():
    r = repr(Headers([("A", "1"), ("a", "2")]))
    assert r == "<Headers (a=2)>"


# ---------------------------------------------------------
# BaseResponse tests
# ---------------------------------------------------------


def test_base_response_text_uses_encoding():
    resp = BaseResponse(content="café".encode("latin-1"), encoding="latin-1")
    assert resp.text == "café"


def test_base_response_text_replaces_bad_bytes():
    resp = BaseResponse(content=b"ok\xff", encoding="utf-8")
    assert resp.text == "ok�"


def test_base_response_unknown_encoding_falls_back_to_utf8():
    resp = BaseResponse(content="café".encode(), encoding="x-unknown")
    assert resp.text == "café"


def test_base_response_set_cookies():
    resp = BaseResponse(
        content=b"",
        headers=[("Set-Cookie", "a=1"), ("Content-Type", "text/plain"), ("Set-Cookie", "b=2")],
    )
    assert resp.set_cookies == ["a=1", "b=2"]
    assert BaseResponse(content=b"").set_cookies == []


def test_base_response_ok_and_redirect():
    assert BaseResponse(content=b"", status=200).ok is True
    assert BaseResponse(content=b"", status=404).ok is False
    assert BaseResponse(content=b"", status=302, headers={"Location": "/x"}).is_redirect
    assert not BaseResponse(content=b"", status=304).is_redirect


def test_base_response_repr():
    r = repr(BaseResponse(content=b"abcd", status=201))
    assert r == "<BaseResponse status=201 len=4>"
