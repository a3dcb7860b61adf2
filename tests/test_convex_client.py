import pytest
import requests

from analytics.config import CacheConfig
from analytics.convex_client import ConvexQueryClient
from analytics.errors import UpstreamFetchError


class _Response:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class _Session:
    def __init__(self, responses):
        self.responses = list(responses)
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _client(tmp_path, responses, cache=False):
    client = ConvexQueryClient(
        base_url="https://example.convex.cloud/",
        auth_token="secret",
        cache=CacheConfig(enabled=cache, base_dir=tmp_path),
    )
    client.session = _Session(responses)
    return client


def test_query_posts_json_payload_and_returns_value(tmp_path) -> None:
    client = _client(tmp_path, [_Response(body={"status": "success", "value": [1, 2]})])
    assert client.query("scrims:listCompleted", {"teamId": "t1"}, backoff_s=0) == [1, 2]
    url, payload = client.session.posts[0]
    assert url == "https://example.convex.cloud/api/query"
    assert payload == {"path": "scrims:listCompleted", "args": {"teamId": "t1"}, "format": "json"}


def test_auth_header_is_set() -> None:
    client = ConvexQueryClient(base_url="https://x", auth_token="tok", cache=CacheConfig(False, None))
    assert client.session.headers["authorization"] == "Bearer tok"


def test_function_error_is_not_retried(tmp_path) -> None:
    client = _client(tmp_path, [_Response(body={"status": "error", "errorMessage": "boom"})])
    with pytest.raises(UpstreamFetchError, match="boom") as exc:
        client.query("users:listByTeam", backoff_s=0)
    assert exc.value.operation == "users:listByTeam"
    assert len(client.session.posts) == 1


def test_transient_failures_are_retried(tmp_path) -> None:
    client = _client(
        tmp_path,
        [
            _Response(status_code=503),
            requests.ConnectionError("reset"),
            _Response(body={"status": "success", "value": {"ok": True}}),
        ],
    )
    assert client.query("a:b", backoff_s=0) == {"ok": True}
    assert len(client.session.posts) == 3


def test_exhausted_retries_raise(tmp_path) -> None:
    client = _client(tmp_path, [_Response(status_code=500), _Response(status_code=429)])
    with pytest.raises(UpstreamFetchError, match="after 2 attempts"):
        client.query("a:b", retries=2, backoff_s=0)


def test_cached_value_skips_network(tmp_path) -> None:
    client = _client(tmp_path, [_Response(body={"status": "success", "value": ["cached"]})], cache=True)
    assert client.query("a:b", {"x": 1}, backoff_s=0) == ["cached"]
    assert client.query("a:b", {"x": 1}, backoff_s=0) == ["cached"]
    assert len(client.session.posts) == 1
    assert len(list(tmp_path.glob("*.json"))) == 1


def test_non_object_body_is_upstream_error(tmp_path) -> None:
    client = _client(tmp_path, [_Response(body=["not", "an", "envelope"])])
    with pytest.raises(UpstreamFetchError, match="expected a response object") as exc:
        client.query("a:b", backoff_s=0)
    assert exc.value.operation == "a:b"
    assert len(client.session.posts) == 1
