"""Configuration management for jamulus-rpc.

This module provides configuration classes that integrate with Django settings,
allowing the control plane to be tuned without code changes.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.core.exceptions import ImproperlyConfigured


@dataclass
class RpcConfig:
    """Main configuration for jamulus-rpc.

    Attributes
    ----------
    enable_firewall_methods : bool
        Whether the access-control methods (``addFirewallAddress`` and
        friends) are registered.
    log_file : str | None
        Path of the server event log. None means the default file name.
    log_rpc_params : bool
        Whether to log RPC method parameters (may contain addresses).
    sanitize_errors : bool
        Whether to log unexpected handler errors without a stack trace.
    max_message_size : int
        Maximum size in bytes of an incoming frame (default: 1MB).

    Examples
    --------
    In Django settings.py::

        JAMULUS_RPC = {
            'ENABLE_FIREWALL_METHODS': False,
            'LOG_FILE': '/var/log/jamulus/server.log',
            'SANITIZE_ERRORS': False,
        }
    """

    enable_firewall_methods: bool = True
    log_file: str | None = None
    log_rpc_params: bool = False
    sanitize_errors: bool = True
    max_message_size: int = 1024 * 1024  # 1MB

    @classmethod
    def from_settings(cls) -> RpcConfig:
        """Load configuration from Django settings.

        Reads configuration from Django settings under the JAMULUS_RPC key.
        Falls back to default values if settings are not configured.

        Returns
        -------
        RpcConfig
            Configuration instance with values from settings or defaults.
        """
        from django.conf import settings

        try:
            config = getattr(settings, "JAMULUS_RPC", {})
        except ImproperlyConfigured:
            # Used outside a Django project
            return cls()

        return cls(
            enable_firewall_methods=config.get(
                "ENABLE_FIREWALL_METHODS", cls.enable_firewall_methods
            ),
            log_file=config.get("LOG_FILE", cls.log_file),
            log_rpc_params=config.get("LOG_RPC_PARAMS", cls.log_rpc_params),
            sanitize_errors=config.get("SANITIZE_ERRORS", cls.sanitize_errors),
            max_message_size=config.get("MAX_MESSAGE_SIZE", cls.max_message_size),
        )


_config: RpcConfig | None = None


def get_config() -> RpcConfig:
    """Return the process-wide configuration, reading settings on first use.

    Firewall registration happens once at startup, so later edits to
    ``settings.JAMULUS_RPC`` only take effect after :func:`reset_config`.
    """
    global _config
    if _config is None:
        _config = RpcConfig.from_settings()
    return _config


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None
