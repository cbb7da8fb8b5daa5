import pytest
import requests

from vibecast import artwork_cache
from vibecast.artwork_cache import ImageCache, default_cache_dir


class FakeResponse:
    def __init__(self, content, status=200):
        self.content = content
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        return self.response


def test_default_cache_dir_is_artwork_subdirectory(tmp_path, monkeypatch):
    monkeypatch.setattr(artwork_cache, "user_cache_dir", lambda *a, **k: str(tmp_path))
    assert default_cache_dir() == tmp_path / "artwork"


def test_cache_path_uses_station_id(tmp_path):
    cache = ImageCache(tmp_path, session=FakeSession(FakeResponse(b"")))
    assert cache.cache_path("groovesalad") == tmp_path / "groovesalad.png"


def test_fetch_stores_and_reuses(tmp_path):
    session = FakeSession(FakeResponse(b"image-bytes"))
    cache = ImageCache(tmp_path, session=session, timeout=3.0)
    assert cache.get_cached("drone") is None
    assert cache.get_or_fetch("http://example.com/a.png", "drone") == b"image-bytes"
    assert session.calls == [("http://example.com/a.png", 3.0)]
    assert cache.get_or_fetch("http://example.com/a.png", "drone") == b"image-bytes"
    assert len(session.calls) == 1
    assert cache.get_cached("drone") == b"image-bytes"


def test_http_error_raises_and_caches_nothing(tmp_path):
    cache = ImageCache(tmp_path, session=FakeSession(FakeResponse(b"x", status=404)))
    with pytest.raises(requests.HTTPError):
        cache.get_or_fetch("http://example.com/missing.png", "gone")
    assert cache.get_cached("gone") is None


def test_creates_given_directory(tmp_path):
    target = tmp_path / "a" / "b"
    cache = ImageCache(target, session=FakeSession(FakeResponse(b"")))
    assert cache.cache_dir == target
    assert target.is_dir()