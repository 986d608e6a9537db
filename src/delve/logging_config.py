import logging
import os

ENV_LOG_LEVEL = "DELVE_LOG_LEVEL"


def configure_logging(default_level: int = logging.WARNING) -> None:
    """Configure root logger with a sane default format.

    Respects DELVE_LOG_LEVEL env var if present.
    """
    level_name = os.getenv(ENV_LOG_LEVEL)
    level = default_level
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
