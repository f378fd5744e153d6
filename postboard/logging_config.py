import logging

from postboard.config import settings


def configure_logging(level: str | None = None) -> None:
    """
    Install a single stream handler on the root logger.

    Safe to call more than once: ``force=True`` replaces any handler left
    behind by a previous call (uvicorn reloads, test sessions).
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
        force=True,
    )
    # SQL echo is controlled by DEBUG on the engine; keep the logger quiet otherwise.
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
