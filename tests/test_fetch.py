"""Tests for resource fetching."""

import pytest
import requests

from puppy_engine.network import (FetchError, NetworkError, Request, Response, URLParseError,
                                  URLSchemeUnsupportedError, create_session, fetch, fetch_url)


class FakeSession:
    """Stands in for requests.Session; records calls and replays a result."""

    def __init__(self, result):
        self.result = result
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers, timeout))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def close(self):
        self.closed = True


def http_response(url, status=200, body=b"<p>hi</p>", headers=None):
    response = requests.Response()
    response.url = url
    response.status_code = status
    response._content = body
    response.headers.update(headers or {"Content-Type": "text/html"})
    return response


class TestFileScheme:
    def test_reads_file(self, page_file):
        path = page_file("<p>local</p>")
        response = fetch(Request(path.as_uri()))
        assert response.status == 200
        assert response.data == b"<p>local</p>"
        assert response.url == path.as_uri()
        assert response.ok

    def test_missing_file(self, tmp_path):
        with pytest.raises(NetworkError):
            fetch_url((tmp_path / "missing.html").as_uri())

    def test_percent_encoded_path(self, page_file):
        path = page_file("<p>x</p>", name="my page.html")
        assert fetch_url(path.as_uri()).data == b"<p>x</p>"


class TestHttpScheme:
    def test_uses_session(self, config):
        session = FakeSession(http_response("http://example.com/"))
        response = fetch(Request("http://example.com/"), config, session)
        assert response == Response(
            "http://example.com/", 200, {"Content-Type": "text/html"}, b"<p>hi</p>")
        assert session.calls == [("http://example.com/", {}, 30)]
        assert not session.closed

    def test_timeout_from_config(self, config):
        config.set("network.timeout", 5)
        session = FakeSession(http_response("https://example.com/"))
        fetch(Request("https://example.com/"), config, session)
        assert session.calls[0][2] == 5

    def test_final_url_after_redirect(self):
        session = FakeSession(http_response("http://example.com/landing"))
        response = fetch(Request("http://example.com/"), session=session)
        assert response.url == "http://example.com/landing"

    def test_error_status_is_returned(self):
        session = FakeSession(http_response("http://example.com/", status=404))
        response = fetch(Request("http://example.com/"), session=session)
        assert response.status == 404
        assert not response.ok

    def test_transport_error(self):
        session = FakeSession(requests.exceptions.ConnectionError("refused"))
        with pytest.raises(NetworkError):
            fetch(Request("http://example.com/"), session=session)

    def test_invalid_url_from_transport(self):
        session = FakeSession(requests.exceptions.InvalidURL("bad"))
        with pytest.raises(URLParseError):
            fetch(Request("http://exa mple.com/"), session=session)


class TestErrors:
    @pytest.mark.parametrize("url", ["ftp://example.com/", "javascript:alert(1)", "data:,x"])
    def test_unsupported_scheme(self, url):
        with pytest.raises(URLSchemeUnsupportedError) as exc_info:
            fetch_url(url)
        assert exc_info.value.scheme == url.split(":")[0]

    def test_no_scheme(self):
        with pytest.raises(URLParseError):
            fetch_url("example.com/index.html")

    def test_unparsable(self):
        with pytest.raises(URLParseError):
            fetch_url("http://[::1")

    def test_hierarchy(self):
        for error in (NetworkError, URLParseError, URLSchemeUnsupportedError):
            assert issubclass(error, FetchError)


class TestSession:
    def test_session_configuration(self, config):
        config.set("network.retries", 5)
        config.set("network.user_agent", "test-agent/1.0")
        session = create_session(config)
        try:
            assert session.headers["User-Agent"] == "test-agent/1.0"
            assert session.get_adapter("https://example.com").max_retries.total == 5
            assert session.verify
        finally:
            session.close()
