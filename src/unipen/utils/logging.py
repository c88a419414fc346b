"""
Logging for UniPen parse runs.

UniPenLogger is a class-level facade over the ``unipen`` logger. Parser,
include resolver and validator call its methods unconditionally; they emit
nothing until a front-end (the ``unipen`` CLI) calls setup_logger() for the
file it is about to parse.

A run writes ``logs/unipen_<file stem>_<timestamp>.log`` next to the parsed
file. Statement dispatch and include expansion are logged at DEBUG,
validation warnings at WARNING. The console handler only shows WARNING and
above so that a clean parse prints nothing but the CLI summary.

Each corpus directory keeps the five newest ``unipen_*.log`` files.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "unipen"
LOG_PREFIX = "unipen_"
KEEP_LOGS = 5


class UniPenLogger:
    """Process-wide logger used by every UniPen module"""

    _logger: Optional[logging.Logger] = None
    _current_log_file: Optional[Path] = None

    @classmethod
    def _cleanup_old_logs(cls, logs_dir: Path, keep_count: int = KEEP_LOGS) -> None:
        """Delete all but the ``keep_count`` newest run logs in ``logs_dir``"""
        log_files = sorted(
            logs_dir.glob(f"{LOG_PREFIX}*.log"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )

        for old_log in log_files[keep_count:]:
            try:
                old_log.unlink()
            except OSError as e:
                # Another run may hold the file open on Windows
                cls.debug(f"Could not remove old log {old_log}: {e}")

    @classmethod
    def setup_logger(cls, file_path: str, log_level: int = logging.INFO) -> logging.Logger:
        """
        Start logging for a parse of ``file_path``.

        Args:
            file_path: UniPen file being parsed; its directory receives ``logs/``
            log_level: Level of the file handler (the console never goes below WARNING)

        Returns:
            The configured ``unipen`` logger
        """
        input_path = Path(file_path)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:17]

        logs_dir = input_path.parent / "logs"
        logs_dir.mkdir(exist_ok=True)
        log_path = logs_dir / f"{LOG_PREFIX}{input_path.stem}_{timestamp}.log"

        # A second run in the same process replaces the previous handlers
        cls.cleanup()

        cls._logger = logging.getLogger(LOGGER_NAME)
        cls._logger.setLevel(log_level)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(max(log_level, logging.WARNING))
        console_handler.setFormatter(formatter)

        cls._logger.addHandler(file_handler)
        cls._logger.addHandler(console_handler)
        cls._current_log_file = log_path

        cls._logger.info(f"Parsing UniPen file: {file_path}")
        cls._logger.info(f"Log file: {log_path}")

        # The new log already exists here, so it counts towards the kept files
        cls._cleanup_old_logs(logs_dir)

        return cls._logger

    @classmethod
    def get_log_file_path(cls) -> Optional[Path]:
        """Log file of the current run, or None when logging is not set up"""
        return cls._current_log_file

    @classmethod
    def info(cls, message: str) -> None:
        if cls._logger:
            cls._logger.info(message)

    @classmethod
    def warning(cls, message: str) -> None:
        if cls._logger:
            cls._logger.warning(message)

    @classmethod
    def error(cls, message: str) -> None:
        if cls._logger:
            cls._logger.error(message)

    @classmethod
    def debug(cls, message: str) -> None:
        if cls._logger:
            cls._logger.debug(message)

    @classmethod
    def success(cls, message: str) -> None:
        """Completed parse, logged at INFO with a check mark"""
        if cls._logger:
            cls._logger.info(f"✅ {message}")

    @classmethod
    def cleanup(cls) -> None:
        """Close the handlers of the current run and go silent again"""
        if cls._logger:
            for handler in cls._logger.handlers[:]:
                cls._logger.removeHandler(handler)
                handler.close()
            cls._logger = None
            cls._current_log_file = None
