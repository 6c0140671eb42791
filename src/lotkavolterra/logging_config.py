import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """Send the package logs to stdout, for use in scripts."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s", "%H:%M:%S")
    )

    logger = logging.getLogger(__package__)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
