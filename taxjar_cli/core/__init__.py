"""Core CLI components - configuration, API client, and shared errors."""

from taxjar_cli.core.api_client import APIClient, APIResponse
from taxjar_cli.core.config import CLIConfig, ConfigStore, Credential

__all__ = ["CLIConfig", "ConfigStore", "Credential", "APIClient", "APIResponse"]
