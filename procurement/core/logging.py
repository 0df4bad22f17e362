import logging
import sys
from pythonjsonlogger import jsonlogger
from procurement.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """
    Structured JSON logging to stdout.

    Every record carries the app name and environment so logs from several
    deployments can share one sink.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # clear handlers if reloaded
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    fmt = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"app": settings.app_name, "env": settings.environment},
    )
    handler.setFormatter(fmt)
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
    # SQL echo is controlled by settings.database_echo, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )
