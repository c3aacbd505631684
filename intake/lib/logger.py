import logging
import sys

from intake.config import get_settings


def get_logger(name: str = "intake") -> logging.Logger:
    """`intake.*` 네임스페이스 로거를 반환한다 (핸들러는 최초 1회만 부착)."""
    if name != "intake" and not name.startswith("intake."):
        name = f"intake.{name}"
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    level = get_settings().log_level.upper()
    logger.setLevel(getattr(logging, level, logging.INFO))
    handler = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
