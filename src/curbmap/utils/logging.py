"""Logging utilities for Curbmap."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class ProjectionStats:
    """Statistics from one projection run."""

    projected_count: int = 0
    degraded_count: int = 0
    omitted_count: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)

    @property
    def segment_count(self) -> int:
        """Number of segments the projection looked at."""
        return self.projected_count + self.degraded_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"curbmap_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("curbmap")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProjectionLogger:
    """Observability channel for geographic projection.

    Records every segment the projection engine handles and keeps running
    statistics, so failed segments can be diagnosed without interrupting
    the projection of the others.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("curbmap.projection")
        self._stats = ProjectionStats()

    def log_projection_start(
        self, blockface_id: str | None, segment_count: int, path_length_km: float
    ) -> None:
        """Log start of a projection run."""
        self._logger.debug(
            "Projecting partition",
            blockface=blockface_id,
            segments=segment_count,
            path_length_km=round(path_length_km, 6),
        )

    def log_segment_projected(self, index: int, segment_type: str, vertex_count: int) -> None:
        """Log a segment that received geometry."""
        self._logger.debug(
            "Segment projected",
            index=index,
            type=segment_type,
            vertices=vertex_count,
        )
        self._stats.projected_count += 1

    def log_segment_failed(
        self,
        index: int,
        segment_type: str,
        error: Exception,
        start_km: float,
        end_km: float,
    ) -> None:
        """Log a segment whose projection failed and was degraded."""
        self._logger.error(
            "Segment projection failed",
            index=index,
            type=segment_type,
            error=str(error),
            error_type=type(error).__name__,
            start_km=start_km,
            end_km=end_km,
        )
        self._stats.degraded_count += 1
        self._stats.errors.append((index, str(error)))

    def log_segment_omitted(self, index: int, vertex_count: int) -> None:
        """Log a segment left out because its geometry cannot be drawn."""
        self._logger.debug("Segment omitted", index=index, vertices=vertex_count)
        self._stats.omitted_count += 1

    def log_invalid_path(self, blockface_id: str | None, reason: str) -> None:
        """Log a path that cannot carry a projection at all."""
        self._logger.warning("Path cannot be projected", blockface=blockface_id, reason=reason)

    @property
    def stats(self) -> ProjectionStats:
        """Get current projection statistics."""
        return self._stats
