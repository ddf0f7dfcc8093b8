"""
Configuration management for dns.do

This module provides global diagnostics configuration. The only setting today
is whether errors capture a backtrace when they are created.
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on", "full"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


class DiagnosticsConfig(BaseModel):
    """Diagnostics settings for the error core.

    Accepts booleans or the usual environment spellings ("1", "full",
    "off", ...) for ``backtrace``.
    """

    backtrace: bool = False

    model_config = {"frozen": True}

    @field_validator("backtrace", mode="before")
    @classmethod
    def parse_flag(cls, v: object) -> bool:
        """Parse environment-style flag strings."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            value = v.strip().lower()
            if value in _TRUTHY:
                return True
            if value in _FALSY:
                return False
        raise ValueError(f"backtrace flag must be a boolean or one of {sorted(_TRUTHY | _FALSY)}")


def _get_env(key: str) -> str | None:
    """Get environment variable value."""
    return os.environ.get(key)


def _backtrace_from_env() -> bool:
    raw = _get_env("DNS_DO_BACKTRACE")
    if raw is None:
        raw = _get_env("PYTHON_BACKTRACE")
    if raw is None:
        return False

    try:
        return DiagnosticsConfig(backtrace=raw).backtrace
    except ValidationError as e:
        logger.warning("Ignoring invalid backtrace setting %r: %s", raw, e.errors()[0]["msg"])
        return False


# Global configuration
_global_config: DiagnosticsConfig = DiagnosticsConfig(backtrace=_backtrace_from_env())


def configure(*, backtrace: bool | str | None = None) -> None:
    """
    Configure diagnostics settings.

    Args:
        backtrace: Capture a stack snapshot on every error construction

    Raises:
        pydantic.ValidationError: If ``backtrace`` is not a recognised flag

    Example::

        from dns_do import configure

        configure(backtrace=True)
    """
    global _global_config

    if backtrace is not None:
        _global_config = DiagnosticsConfig(backtrace=backtrace)
        logger.debug(
            "Backtrace capture %s", "enabled" if _global_config.backtrace else "disabled"
        )


def get_config() -> DiagnosticsConfig:
    """
    Get current diagnostics configuration.

    Returns:
        Current configuration object
    """
    return _global_config


def configure_from_env() -> None:
    """
    Configure diagnostics from environment variables.

    Reads from:
        - DNS_DO_BACKTRACE
        - PYTHON_BACKTRACE (fallback)
    """
    configure(backtrace=_backtrace_from_env())
