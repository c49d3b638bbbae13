"""Error taxonomy shared by the config store, API client and commands."""

from __future__ import annotations


class TaxJarError(Exception):
    """Base class for every error the CLI reports to the user."""


class MissingCredentialError(TaxJarError):
    """No API key in the environment or the config file."""

    def __init__(self, message: str = "No API key configured."):
        super().__init__(message)


class ConfigError(TaxJarError):
    """The config file could not be written."""


class UsageError(TaxJarError):
    """Malformed or missing command-line arguments."""

    def __init__(self, message: str, usage: str = ""):
        super().__init__(message)
        self.usage = usage


class ApiError(TaxJarError):
    """The API answered with a non-2xx status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"TaxJar API Error ({status}): {message}")
        self.status = status
        self.message = message


class NetworkError(TaxJarError):
    """The request went out but no response came back."""

    def __init__(
        self,
        message: str = (
            "Network error: No response received from TaxJar API. "
            "Check your internet connection."
        ),
    ):
        super().__init__(message)


class RequestError(TaxJarError):
    """The request could not be built or sent."""

    def __init__(self, message: str):
        super().__init__(f"Request error: {message}")
        self.message = message
