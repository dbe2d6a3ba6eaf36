"""Django application configuration for jamulus-rpc."""

from __future__ import annotations

import logging

from django.apps import AppConfig

logger = logging.getLogger("jamulus_rpc")


class JamulusRpcConfig(AppConfig):
    """Django app configuration for jamulus-rpc.

    Examples
    --------
    Add to INSTALLED_APPS in settings.py::

        INSTALLED_APPS = [
            ...
            'channels',
            'jamulus_rpc',
            ...
        ]
    """

    name = "jamulus_rpc"
    verbose_name = "Jamulus server control"

    def ready(self) -> None:
        """Load the configuration once Django is set up.

        Invalid settings then fail at startup rather than on the first RPC
        call.
        """
        from jamulus_rpc.config import get_config

        config = get_config()

        logger.info(
            "jamulus-rpc initialized: ENABLE_FIREWALL_METHODS=%s, LOG_FILE=%s, "
            "MAX_MESSAGE_SIZE=%d",
            config.enable_firewall_methods,
            config.log_file or "<default>",
            config.max_message_size,
        )

        if config.log_rpc_params:
            logger.warning(
                "LOG_RPC_PARAMS is enabled - RPC parameters will be logged. "
                "They may include client addresses."
            )
