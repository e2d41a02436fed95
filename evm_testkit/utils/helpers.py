"""
Helper utilities for evm-testkit

Logging setup and timing shared by the test helpers.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

import structlog

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Applied to stdlib records and structlog events alike
SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _build_formatter(structured: bool) -> logging.Formatter:
    if not structured:
        return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer()
        ],
        foreign_pre_chain=SHARED_PROCESSORS,
    )


def setup_logging(level: str = "INFO",
                  log_file: Optional[str] = None,
                  structured: bool = True) -> None:
    """
    Route package and third-party logging to stderr and an optional file

    With structured set, every record is rendered as one JSON object per
    line, whether it was emitted through ``logging.getLogger`` or
    ``structlog.get_logger``.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        structured: Render records as JSON instead of plain text
    """
    log_level = getattr(logging, level.upper())
    formatter = _build_formatter(structured)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)

    # Replaces the handlers installed on package import
    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    logging.getLogger('web3').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('eth_account').setLevel(logging.WARNING)

    if structured:
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *SHARED_PROCESSORS,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.UnicodeDecoder(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    logger.debug(f"Logging configured at {level.upper()} (structured={structured})")


class Timer:
    """Measures a block and logs its duration at DEBUG"""

    def __init__(self, name: str = "Operation"):
        self.name = name
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.end_time = time.perf_counter()
        logger.debug(f"{self.name} took {self.duration * 1000:.1f} ms")

    @property
    def duration(self) -> float:
        """Elapsed seconds, running total while inside the block"""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time
