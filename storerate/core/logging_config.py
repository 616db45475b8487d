import logging

from storerate.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = None):
    """Configure the root logger once for the whole service."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn's access log is noisy at INFO and duplicates our request logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
