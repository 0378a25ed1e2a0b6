"""Unit tests for settings and the app version helper."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError

import pytest
from pydantic import ValidationError

from reelsmith.config import Settings, get_settings, settings


def test_defaults_match_generation_service(monkeypatch) -> None:
    for key in ("GENERATION_API_URL", "GENERATION_PROVIDER", "GENERATION_TIMEOUT_S"):
        monkeypatch.delenv(key, raising=False)

    cfg = Settings(_env_file=None)

    assert cfg.generation_api_url == "https://oi-server.onrender.com/chat/completions"
    assert cfg.generation_model == "replicate/google/veo-3"
    assert cfg.generation_provider == "real"
    assert cfg.generation_timeout_s is None
    assert cfg.history_limit == 10


def test_blank_timeout_means_unset(monkeypatch) -> None:
    monkeypatch.setenv("GENERATION_TIMEOUT_S", "")
    assert Settings(_env_file=None).generation_timeout_s is None

    monkeypatch.setenv("GENERATION_TIMEOUT_S", "120")
    assert Settings(_env_file=None).generation_timeout_s == 120.0


def test_history_limit_must_be_positive(monkeypatch) -> None:
    monkeypatch.setenv("HISTORY_LIMIT", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_unknown_provider_mode_rejected(monkeypatch) -> None:
    monkeypatch.setenv("GENERATION_PROVIDER", "sometimes")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_proxy_follows_cache_reset(settings_env) -> None:
    settings_env(GENERATION_MODEL="first/model")
    assert settings.generation_model == "first/model"

    settings_env(GENERATION_MODEL="second/model")
    assert settings.generation_model == "second/model"
    assert get_settings().generation_model == "second/model"


def test_get_app_version_falls_back_to_pyproject(monkeypatch, tmp_path) -> None:
    from reelsmith import app_version as mod

    monkeypatch.setattr(
        mod, "_dist_version", lambda _name: (_ for _ in ()).throw(PackageNotFoundError())
    )
    monkeypatch.setattr(mod, "get_repo_root", lambda: tmp_path)
    (tmp_path / "pyproject.toml").write_bytes(b'[project]\nversion = "1.2.3"\n')

    assert mod.get_app_version("missing") == "1.2.3"


def test_get_app_version_returns_default_on_read_error(monkeypatch, tmp_path) -> None:
    from reelsmith import app_version as mod

    monkeypatch.setattr(
        mod, "_dist_version", lambda _name: (_ for _ in ()).throw(PackageNotFoundError())
    )
    monkeypatch.setattr(mod, "get_repo_root", lambda: tmp_path)
    (tmp_path / "pyproject.toml").write_text("not toml [")

    assert mod.get_app_version("missing") == "0.0.0"
