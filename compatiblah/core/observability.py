from __future__ import annotations

import logging

import sentry_sdk

from compatiblah.core.config import Settings, settings as default_settings


def configure_logging(config: Settings | None = None) -> None:
    """Set up root logging and, when a DSN is configured, Sentry error reporting.

    Only entry points call this; library modules just use ``logging.getLogger``.
    """
    cfg = config or default_settings
    logging.basicConfig(level=cfg.log_level, format="%(message)s")
    if cfg.sentry_dsn:
        sentry_sdk.init(dsn=cfg.sentry_dsn)
