# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl
import threading
import time

import httpx
import pytest

from checkhttp.config import ProbeConfig, TlsOptions
from checkhttp.evaluation import evaluate
from checkhttp.errors import ConfigurationError, ErrorCategory
from checkhttp.http.adapters import StubHttpClient
from checkhttp.http.httpx_client import HttpxClient
from checkhttp.http.models import HttpRequest, HttpResponse
from checkhttp.http.request_builder import build_request, build_url
from checkhttp.http.tls import build_ssl_context
from checkhttp.models import ProbeResult, Severity


def _mock_client(handler) -> HttpxClient:
    return HttpxClient(httpx.Client(transport=httpx.MockTransport(handler)), timeout=5.0)


def test_build_request_defaults():
    cfg = ProbeConfig(host="example.com", user_agent="probe/1")
    request = build_request(cfg)
    assert request.url == "http://example.com:80/"
    assert request.method == "GET"
    assert request.headers == {"User-Agent": "probe/1"}
    assert request.body is None
    assert request.allow_redirects is False
    assert request.timeout == 10.0


def test_build_request_tls_custom_port_and_path():
    cfg = ProbeConfig(host="10.0.0.1", port=8443, path="health", tls=TlsOptions(enabled=True), method="HEAD")
    request = build_request(cfg)
    assert request.url == "https://10.0.0.1:8443/health"
    assert request.method == "HEAD"


def test_build_request_sets_host_header_for_vhost():
    cfg = ProbeConfig(host="10.0.0.1", vhost="www.example.com")
    assert build_request(cfg).headers["Host"] == "www.example.com"

    same = ProbeConfig(host="www.example.com", vhost="www.example.com")
    assert "Host" not in build_request(same).headers


def test_build_url_brackets_ipv6_and_requires_host():
    assert build_url(ProbeConfig(host="::1")) == "http://[::1]:80/"
    with pytest.raises(ConfigurationError):
        build_url(ProbeConfig(host=""))


def test_httpx_client_reads_body_and_status_line():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers.get("user-agent")
        seen["host"] = request.headers.get("host")
        return httpx.Response(200, content=b'{"ok": true}')

    client = _mock_client(handler)
    resp = client.request(
        HttpRequest(url="http://10.0.0.1:80/", headers={"User-Agent": "probe/1", "Host": "vhost.example"})
    )

    assert resp.ok is True
    assert resp.status_code == 200
    assert resp.status_line == "200 OK"
    assert resp.http_version == "HTTP/1.1"
    assert resp.content == b'{"ok": true}'
    assert resp.elapsed >= 0.0
    assert seen == {"ua": "probe/1", "host": "vhost.example"}


def test_httpx_client_does_not_follow_redirects():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/":
            return httpx.Response(302, headers={"Location": "/elsewhere"})
        return httpx.Response(200)

    resp = _mock_client(handler).request(HttpRequest(url="http://example.com:80/"))
    assert resp.status_code == 302
    assert resp.status_line == "302 Found"


def test_httpx_client_converts_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    resp = _mock_client(handler).request(HttpRequest(url="http://example.com:80/"))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_message == "connection refused"
    assert resp.error_type == "ConnectError"
    assert resp.error_category == ErrorCategory.CONNECTION_ERROR


def test_httpx_client_enforces_overall_deadline(monkeypatch):
    calls = []

    def fake_monotonic():
        calls.append(None)
        return 0.0 if len(calls) == 1 else 100.0

    monkeypatch.setattr(time, "monotonic", fake_monotonic)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"slow body")

    resp = _mock_client(handler).request(HttpRequest(url="http://example.com:80/", timeout=1.0))
    assert resp.ok is False
    assert resp.error_category == ErrorCategory.TIMEOUT
    assert "timed out" in resp.error_message


def test_httpx_client_reads_large_body_in_full():
    payload = b"x" * (20 * 1024 * 1024)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=payload)

    resp = _mock_client(handler).request(HttpRequest(url="http://example.com:80/"))
    assert resp.ok is True
    assert len(resp.content) == len(payload)


@pytest.fixture
def trickle_server():
    """Serve one response whose header lines arrive `delay` seconds apart."""
    sockets = []

    def start(delay: float, header_lines: int) -> str:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        listener.settimeout(10)
        sockets.append(listener)

        def serve():
            try:
                conn, _ = listener.accept()
            except OSError:
                return
            with conn:
                try:
                    data = b""
                    while b"\r\n\r\n" not in data:
                        chunk = conn.recv(4096)
                        if not chunk:
                            return
                        data += chunk
                    conn.sendall(b"HTTP/1.1 200 OK\r\n")
                    for index in range(header_lines):
                        time.sleep(delay)
                        conn.sendall(f"X-Line-{index}: {index}\r\n".encode())
                    conn.sendall(b"Content-Length: 0\r\nConnection: close\r\n\r\n")
                except OSError:
                    return

        threading.Thread(target=serve, daemon=True).start()
        return f"http://127.0.0.1:{listener.getsockname()[1]}/"

    yield start
    for listener in sockets:
        listener.close()


def test_httpx_client_times_out_on_slow_headers_with_empty_body(trickle_server):
    url = trickle_server(delay=0.2, header_lines=6)
    client = HttpxClient(httpx.Client(trust_env=False), timeout=0.5)
    try:
        resp = client.request(HttpRequest(url=url, method="HEAD", timeout=0.5))
    finally:
        client.close()

    assert resp.ok is False
    assert resp.error_category == ErrorCategory.TIMEOUT
    assert "timed out after 0.5s" in resp.error_message


def test_slow_headers_past_timeout_are_critical(trickle_server):
    url = trickle_server(delay=0.2, header_lines=6)
    client = HttpxClient(httpx.Client(trust_env=False), timeout=0.5)
    try:
        result = ProbeResult.from_response(client.request(HttpRequest(url=url, timeout=0.5)))
    finally:
        client.close()

    verdict = evaluate(ProbeConfig(host="127.0.0.1", warning=30.0, critical=60.0), result)
    assert verdict.severity is Severity.CRITICAL
    assert "timed out" in verdict.message


def test_httpx_client_accepts_empty_body_within_timeout(trickle_server):
    url = trickle_server(delay=0.01, header_lines=2)
    client = HttpxClient(httpx.Client(trust_env=False), timeout=5.0)
    try:
        resp = client.request(HttpRequest(url=url, timeout=5.0))
    finally:
        client.close()

    assert resp.ok is True
    assert resp.status_code == 200
    assert resp.content == b""


def test_httpx_client_from_config_and_close():
    client = HttpxClient.from_config(ProbeConfig(host="example.com", timeout=3))
    assert client.timeout == 3.0
    client.close()


def test_build_ssl_context_skips_verification_by_default():
    context = build_ssl_context(TlsOptions(enabled=True))
    assert context.verify_mode == ssl.CERT_NONE
    assert context.check_hostname is False


def test_build_ssl_context_verifies_when_requested():
    context = build_ssl_context(TlsOptions(enabled=True, verify=True))
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert context.check_hostname is True


def test_build_ssl_context_rejects_unloadable_client_cert(tmp_path):
    cert = tmp_path / "cert.pem"
    key = tmp_path / "key.pem"
    cert.write_text("not a certificate")
    key.write_text("not a key")

    with pytest.raises(ConfigurationError, match="cannot load client certificate"):
        build_ssl_context(TlsOptions(enabled=True, client_cert=str(cert), private_key=str(key)))

    with pytest.raises(ConfigurationError):
        build_ssl_context(TlsOptions(enabled=True, client_cert=str(tmp_path / "missing.pem"), private_key=str(key)))


def test_build_ssl_context_requires_both_halves():
    with pytest.raises(ConfigurationError):
        build_ssl_context(TlsOptions(enabled=True, client_cert="cert.pem"))


def test_stub_http_client_returns_registered_responses():
    stub = StubHttpClient()
    stub.add("http://example", HttpResponse(ok=True, status_code=200, content=b"hello"))
    assert stub.request(HttpRequest(url="http://example")).text == "hello"
    missing = stub.request(HttpRequest(url="http://missing"))
    assert missing.ok is False
    assert stub.requests[0].url == "http://example"
