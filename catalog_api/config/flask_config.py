import logging

from flask import Flask

from catalog_api.config.settings import Settings, settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(cfg: Settings = settings) -> None:
    root = logging.getLogger()
    level = logging.getLevelName(cfg.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if not any(getattr(h, "_catalog_api", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._catalog_api = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    root.setLevel(level)
    # SQL echo is too noisy at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def configure_app(app: Flask, cfg: Settings = settings) -> None:
    app.config["ENV"] = cfg.environment
    app.config["DEBUG"] = cfg.debug
    app.json.sort_keys = False
    configure_logging(cfg)
