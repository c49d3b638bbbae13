"""CLI configuration - API key and base URL resolution."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from taxjar_cli.core.errors import ConfigError, MissingCredentialError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.taxjar.com/v2"
SANDBOX_BASE_URL = "https://api.sandbox.taxjar.com/v2"
DEFAULT_TIMEOUT = 30.0
KEY_MASK = "****"


class EnvSettings(BaseSettings):
    """TAXJAR_* environment variables. Empty values count as unset."""

    model_config = SettingsConfigDict(
        env_prefix="TAXJAR_", env_ignore_empty=True, extra="ignore"
    )

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    config_dir: Optional[Path] = None


class StoredConfig(BaseModel):
    """The persisted config record."""

    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(default="", alias="apiKey")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")


@dataclass(frozen=True)
class Credential:
    """API key and base URL used to authenticate one invocation."""

    api_key: str
    base_url: str


@dataclass(frozen=True)
class ConfigView:
    """Redacted view of the configuration for display."""

    masked_api_key: str
    base_url: str
    storage_location: str
    source: Optional[str] = None


def default_config_path(env: Optional[EnvSettings] = None) -> Path:
    """Per-user config file location."""
    env = env or EnvSettings()
    if env.config_dir:
        return Path(env.config_dir) / "config.json"
    return Path.home() / ".config" / "taxjar-cli" / "config.json"


def mask_api_key(key: str) -> str:
    """Show the first and last 4 characters of a key, mask the rest."""
    if not key:
        return "(not set)"
    if len(key) < 8:
        return KEY_MASK
    return f"{key[:4]}{KEY_MASK}{key[-4:]}"


class ConfigStore:
    """File-backed store for the API key and base URL."""

    def __init__(self, path: Optional[Path] = None, env: Optional[EnvSettings] = None):
        self.env = env or EnvSettings()
        self.path = Path(path) if path else default_config_path(self.env)

    def load(self) -> StoredConfig:
        """Read the stored record. A missing or corrupt file reads as empty."""
        if not self.path.exists():
            return StoredConfig()
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return StoredConfig.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", self.path, e)
            return StoredConfig()

    def save(self, stored: StoredConfig) -> None:
        """Write the record atomically."""
        payload = json.dumps(stored.model_dump(by_alias=True), indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".config-")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ConfigError(f"Could not write config file {self.path}: {e}") from e
        logger.debug("Saved config to %s", self.path)

    def set_api_key(self, key: str) -> None:
        """Persist the API key, replacing any stored one."""
        stored = self.load()
        stored.api_key = key
        self.save(stored)

    def set_base_url(self, url: str) -> None:
        """Persist the base URL, e.g. the sandbox endpoint."""
        stored = self.load()
        stored.base_url = url.rstrip("/")
        self.save(stored)

    def _resolve_api_key(self) -> tuple[str, Optional[str]]:
        if self.env.api_key:
            return self.env.api_key, "environment"
        stored = self.load().api_key
        if stored:
            return stored, "config file"
        return "", None

    def get_base_url(self) -> str:
        """Base URL from TAXJAR_BASE_URL, the config file, or production."""
        return (self.env.base_url or self.load().base_url or DEFAULT_BASE_URL).rstrip("/")

    def get_credential(self) -> Credential:
        """
        Resolve the credential for this invocation.

        The environment wins over the config file.

        Raises:
            MissingCredentialError: If neither source has a key
        """
        api_key, _ = self._resolve_api_key()
        if not api_key:
            raise MissingCredentialError()
        return Credential(api_key=api_key, base_url=self.get_base_url())

    def show(self) -> ConfigView:
        """Return a redacted view; the raw key never leaves this method."""
        api_key, source = self._resolve_api_key()
        return ConfigView(
            masked_api_key=mask_api_key(api_key),
            base_url=self.get_base_url(),
            storage_location=str(self.path),
            source=source,
        )


@dataclass
class CLIConfig:
    """Configuration for one TaxJar CLI invocation."""

    store: ConfigStore = field(default_factory=ConfigStore)
    timeout: float = DEFAULT_TIMEOUT
    verbose: bool = False

    def credential(self) -> Credential:
        """Resolve the credential. Raises MissingCredentialError."""
        return self.store.get_credential()

    @classmethod
    def from_env(cls, verbose: bool = False) -> "CLIConfig":
        """Create config from TAXJAR_* environment variables."""
        return cls(store=ConfigStore(env=EnvSettings()), verbose=verbose)
