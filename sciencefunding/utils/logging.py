import os
import logging
from logging.handlers import RotatingFileHandler

REWARD_LEVEL_NUM = 38
DEFAULT_LOG_BACKUP_COUNT = 10
REWARD_FIELDS = ("subject", "funds", "rep")


class RewardFormatter(logging.Formatter):
    """Appends the report fields passed through ``extra`` as ``key=value`` pairs."""

    def format(self, record):
        line = super().format(record)
        fields = [
            f"{name}={getattr(record, name)!r}"
            for name in REWARD_FIELDS
            if hasattr(record, name)
        ]
        if fields:
            line = f"{line} | {' '.join(fields)}"
        return line


def setup_rewards_logger(full_path, rewards_retention_size, session_id=None):
    """
    Setup rewards logger with optional session ID in filename.

    Every flushed report is written at the REWARD level with its subject, funds
    and reputation, which gives a history of what the player was paid that does
    not depend on the save file.

    Args:
        full_path: Base directory for log files
        rewards_retention_size: Maximum size of log files before rotation
        session_id: Optional session identifier to include in filename (default: None)
    """
    logging.addLevelName(REWARD_LEVEL_NUM, "REWARD")

    logger = logging.getLogger("reward")
    logger.setLevel(REWARD_LEVEL_NUM)

    def reward(self, message, *args, **kws):
        if self.isEnabledFor(REWARD_LEVEL_NUM):
            self._log(REWARD_LEVEL_NUM, message, args, **kws)

    logging.Logger.reward = reward

    formatter = RewardFormatter(
        "%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_filename = f"rewards_{session_id}.log" if session_id is not None else "rewards.log"
    log_file = os.path.join(full_path, log_filename)

    os.makedirs(full_path, exist_ok=True)

    # Re-running setup for the same file must not duplicate lines
    for handler in list(logger.handlers):
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == os.path.abspath(log_file):
            return logger

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=rewards_retention_size,
        backupCount=DEFAULT_LOG_BACKUP_COUNT,
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(REWARD_LEVEL_NUM)
    logger.addHandler(file_handler)

    return logger
