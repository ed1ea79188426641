"""Tests for settings loading and service construction from settings."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest
from pydantic import ValidationError

from connections_wikis import WikisService, WikisSettings
from connections_wikis.auth import BearerAuth
from connections_wikis.config import CONFIG_PATH_ENV


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _clear_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)


def _write(tmp_path: Path, text: str) -> Path:
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir(parents=True, exist_ok=True)
    config_file = conf_dir / "wikis.yml"
    config_file.write_text(text.strip())
    return config_file


def test_from_file_missing_file(tmp_path: Path) -> None:
    """Given no config file, when `from_file()` runs, then a
    `FileNotFoundError` is raised."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        WikisSettings.from_file(tmp_path / "conf" / "wikis.yml")


def test_from_file_normalizes_keys_and_builds_bearer_auth(tmp_path: Path) -> None:
    config_file = _write(
        tmp_path,
        """
BASE_URL: https://apps.example.com/wikis/
ACCESS_TOKEN: token-123
headers:
  user-agent: wikis-client
timeout: 5
""",
    )

    settings = WikisSettings.from_file(config_file)

    assert str(settings.base_url) == "https://apps.example.com/wikis/"
    assert settings.headers == {"user-agent": "wikis-client"}
    assert settings.timeout == 5.0
    assert isinstance(settings.build_auth(), BearerAuth)
    assert settings.resolved_auth_type() == "oauth"


def test_env_path_takes_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = _write(
        tmp_path,
        """
base_url: https://env.example.com/wikis/
username: jane
password: pw
""",
    )
    monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))

    settings = WikisSettings.from_file(tmp_path / "ignored.yml")

    assert str(settings.base_url) == "https://env.example.com/wikis/"
    assert isinstance(settings.build_auth(), httpx.BasicAuth)
    assert settings.resolved_auth_type() == "basic"


def test_explicit_auth_type_wins() -> None:
    settings = WikisSettings(
        base_url="https://apps.example.com/wikis/",  # type: ignore[arg-type]
        auth_type="saml",
    )

    assert settings.build_auth() is None
    assert settings.resolved_auth_type() == "saml"


def test_username_requires_password() -> None:
    with pytest.raises(ValidationError, match="together"):
        WikisSettings(
            base_url="https://apps.example.com/wikis/",  # type: ignore[arg-type]
            username="jane",
        )


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    config_file = _write(tmp_path, "- just\n- a list")

    with pytest.raises(ValueError, match="mapping"):
        WikisSettings.from_file(config_file)


def test_service_from_settings_applies_defaults() -> None:
    settings = WikisSettings(
        base_url="https://apps.example.com/wikis",  # type: ignore[arg-type]
        access_token="token",
        media_auth_type="basic",
        headers={"user-agent": "wikis-client"},
    )

    async def scenario() -> WikisService:
        async with WikisService.from_settings(settings) as service:
            return service

    service = asyncio.run(scenario())

    assert service.base_url == "https://apps.example.com/wikis/"
    assert service.defaults["auth_type"] == "oauth"
    assert service.defaults["media_auth_type"] == "basic"
    assert service.defaults["headers"] == {"user-agent": "wikis-client"}


def test_service_from_settings_owns_client_with_configured_timeout() -> None:
    """Given settings with a timeout, when the service builds its own client,
    then the client carries that timeout and is closed with the service."""
    settings = WikisSettings(
        base_url="https://apps.example.com/wikis",  # type: ignore[arg-type]
        timeout=7,
    )

    async def scenario() -> httpx.AsyncClient:
        async with WikisService.from_settings(settings) as service:
            client = service._owned_client
            assert client is not None
            assert client.timeout == httpx.Timeout(7.0)
            assert "timeout" not in service.defaults
            return client

    assert asyncio.run(scenario()).is_closed


def test_service_from_settings_sends_timeout_with_supplied_client() -> None:
    settings = WikisSettings(
        base_url="https://apps.example.com/wikis",  # type: ignore[arg-type]
        timeout=4,
    )

    async def scenario() -> WikisService:
        async with httpx.AsyncClient() as client:
            service = WikisService.from_settings(settings, client=client)
            await service.aclose()
            assert not client.is_closed
            return service

    service = asyncio.run(scenario())

    assert service.defaults["timeout"] == 4.0
