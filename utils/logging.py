import logging, structlog
from utils.env import env

def configure_logging(level: str | None = None):
    lvl = getattr(logging, (level or env("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=lvl)
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(lvl),
        cache_logger_on_first_use=True,
    )
