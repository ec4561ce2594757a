"""
Bootstrap error types.

Fatal startup conditions raise a subclass of BootstrapError so the launcher can
report them and exit non-zero. Non-fatal read failures (env file, site list)
never raise; they are logged as warnings by the modules that read them.
"""

from __future__ import annotations

from typing import Optional


# PUBLIC_INTERFACE
class ErrorCode:
    """Enum-like class for standardized bootstrap error codes."""
    SERVER_CONTRACT = "SERVER_CONTRACT"
    CONFIGURATION = "CONFIGURATION"


# PUBLIC_INTERFACE
class BootstrapError(RuntimeError):
    """Base class for fatal bootstrap failures."""

    code: str = "BOOTSTRAP_ERROR"

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.target = target


# PUBLIC_INTERFACE
class ServerContractError(BootstrapError):
    """The server entry module could not be loaded or does not expose start(config)."""

    code = ErrorCode.SERVER_CONTRACT


# PUBLIC_INTERFACE
class ConfigurationError(BootstrapError):
    """Bootstrap settings or the base config module are unusable."""

    code = ErrorCode.CONFIGURATION
