"""Service settings loaded from a YAML file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import httpx
from omegaconf import OmegaConf
from pydantic import BaseModel, Field, HttpUrl, model_validator

from .auth import BearerAuth, default_auth_type

CONFIG_PATH_ENV = "CONNECTIONS_WIKIS_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "conf/wikis.yml"


def _resolve_config_location(spec: Path | str, *, source: str) -> Path:
    raw = Path(spec).expanduser()
    candidates = (raw,) if raw.is_absolute() else (Path.cwd() / raw,)
    for candidate in candidates:
        if candidate.exists():
            return candidate.resolve()
    checked = "\n".join(str(candidate) for candidate in candidates)
    raise FileNotFoundError(f"Config file not found for {source}: {raw}\nChecked:\n{checked}")


def _load_normalized_config(location: Path) -> dict[str, Any]:
    raw_config = OmegaConf.load(location)
    config = OmegaConf.to_container(raw_config, resolve=True)
    if not isinstance(config, dict):
        raise ValueError("Config file must contain a mapping of settings.")
    return {str(key).lower(): value for key, value in config.items()}


class WikisSettings(BaseModel):
    """Connection settings for a wikis service instance."""

    base_url: HttpUrl = Field(
        description="Base URL of the wikis application",
        examples=["https://apps.na.collabserv.com/wikis/"],
    )
    auth_type: str | None = Field(
        default=None,
        description="URL auth segment (oauth, basic, saml, cookie); derived from credentials",
    )
    media_auth_type: str | None = Field(
        default=None,
        description="Auth segment used for media content links; defaults to auth_type",
    )
    access_token: str | None = Field(default=None, description="OAuth bearer token")
    username: str | None = Field(default=None, description="Basic auth user name")
    password: str | None = Field(default=None, description="Basic auth password")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    follow_redirects: bool = True

    @model_validator(mode="after")
    def _check_credentials(self) -> WikisSettings:
        if bool(self.username) != bool(self.password):
            raise ValueError("username and password must be provided together")
        return self

    def build_auth(self) -> httpx.Auth | None:
        """Return the auth strategy implied by the configured credentials."""
        if self.access_token:
            return BearerAuth(self.access_token)
        if self.username and self.password:
            return httpx.BasicAuth(self.username, self.password)
        return None

    def resolved_auth_type(self) -> str:
        if self.auth_type is not None:
            return self.auth_type
        return default_auth_type(self.build_auth())

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> WikisSettings:
        """Create settings from a YAML file, ``conf/wikis.yml`` by default."""
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            location = _resolve_config_location(env_path, source=CONFIG_PATH_ENV)
        elif path is not None:
            location = _resolve_config_location(path, source="path")
        else:
            location = _resolve_config_location(DEFAULT_CONFIG_PATH, source="default")

        return cls(**_load_normalized_config(location))
