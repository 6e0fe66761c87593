import os
import sys

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)
LOG_FILE = "logs/riskradar_{time:YYYY-MM-DD}.log"


def setup_logger(
    *, json_logs: bool = False, level: str = "INFO", log_to_file: bool = True
) -> None:
    """Route riskradar's tagged log lines to stdout and, optionally, a daily file.

    The stdout sink honours LOG_LEVEL over the ``level`` argument and emits
    loguru's JSON records when ``json_logs`` is set. The file sink always
    records DEBUG, which keeps the [ADAPTER], [FEATURES], [ML], [AI] and
    [ANALYSIS] trail for every scored token.
    """
    stdout_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=stdout_level)
    else:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=stdout_level, colorize=True)

    if not log_to_file:
        return
    # Rotated files are gzipped and pruned after three days
    logger.add(
        LOG_FILE,
        rotation="50 MB",
        retention="3 days",
        compression="gz",
        level="DEBUG",
        serialize=json_logs,
    )
