"""Pytest configuration and shared fixtures."""

import os
import sys
import tempfile
from pathlib import Path

import httpx
import pytest

# Ensure source tree is importable without editable install
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


def pytest_configure(config):
    """Configure pytest markers and environment for tests."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")

    # These MUST override any developer shell/.env values to keep the test run deterministic.
    os.environ["ENVIRONMENT"] = "test"
    os.environ["GENERATION_PROVIDER"] = "real"
    os.environ["GENERATION_API_URL"] = "http://upstream.test/chat/completions"
    os.environ["GENERATION_API_KEY"] = ""
    os.environ["GENERATION_CUSTOMER_ID"] = ""
    os.environ["GENERATE_RATE_LIMIT"] = "1000/minute"
    os.environ["SENTRY_DSN"] = ""
    os.environ["CORS_ORIGINS"] = "[]"

    # Never touch the developer's real history in ~/.reelsmith.
    run_dir = Path(tempfile.mkdtemp(prefix="reelsmith_pytest_"))
    os.environ["HISTORY_PATH"] = str(run_dir / "history.json")
    os.environ["OUTPUT_DIR"] = str(run_dir / "videos")


@pytest.fixture(autouse=True)
def block_external_http(monkeypatch):
    """Fail the fast lane if code tries to hit the public internet.

    Allowlist only:
    - clients wired to httpx.MockTransport / httpx.ASGITransport
    - localhost/loopback for local services
    """

    allowed_hosts = {"test", "testserver", "localhost", "127.0.0.1", "0.0.0.0"}
    in_process = (httpx.MockTransport, httpx.ASGITransport)

    def _blocked(client, url) -> bool:  # type: ignore[no-untyped-def]
        if isinstance(getattr(client, "_transport", None), in_process):
            return False
        u = client._merge_url(url)
        return u.scheme in {"http", "https"} and (u.host or "") not in allowed_hosts

    async def _async_guard(self, method, url, *args, **kwargs):  # type: ignore[no-untyped-def]
        if _blocked(self, url):
            raise RuntimeError(f"External HTTP blocked in tests: {url!s}")
        return await _orig_async_request(self, method, url, *args, **kwargs)

    def _sync_guard(self, method, url, *args, **kwargs):  # type: ignore[no-untyped-def]
        if _blocked(self, url):
            raise RuntimeError(f"External HTTP blocked in tests: {url!s}")
        return _orig_sync_request(self, method, url, *args, **kwargs)

    _orig_async_request = httpx.AsyncClient.request
    _orig_sync_request = httpx.Client.request
    monkeypatch.setattr(httpx.AsyncClient, "request", _async_guard, raising=True)
    monkeypatch.setattr(httpx.Client, "request", _sync_guard, raising=True)

    yield


def _reset_limiter_storage() -> None:
    from reelsmith.api.rate_limit import limiter

    storage = getattr(getattr(limiter, "_limiter", None), "storage", None)
    if storage is not None and hasattr(storage, "reset"):
        storage.reset()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter state between tests to avoid collision."""
    _reset_limiter_storage()
    yield
    _reset_limiter_storage()


@pytest.fixture
def settings_env(monkeypatch, tmp_path):
    """Per-test settings: isolated history/output paths plus env overrides.

    Returns a setter; call it with KEY=value pairs to change settings.
    """
    from reelsmith.config import reset_settings_cache

    monkeypatch.setenv("HISTORY_PATH", str(tmp_path / "history.json"))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "videos"))
    reset_settings_cache()

    def _set(**env: str) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        reset_settings_cache()

    yield _set
    reset_settings_cache()


@pytest.fixture
def sample_text() -> str:
    return "5 habits that changed my mornings"
