"""Logging configuration for genannot annotation runs.

Provides structured logging of reference data loads and per-record
annotation outcomes for auditing and debugging.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any


class AnnotationLogger:
    """Logger for annotation runs with structured output."""

    def __init__(self, log_dir: Path | None = None, enable_file_logging: bool = True):
        """Initialize the annotation logger.

        Args:
            log_dir: Directory for log files. Defaults to ./logs
            enable_file_logging: Whether to write JSONL logs to files
        """
        self.logger = logging.getLogger("genannot.run")
        self.logger.setLevel(logging.INFO)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

        self.file_handler = None
        if enable_file_logging:
            if log_dir is None:
                log_dir = Path("./logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d")
            log_file = log_dir / f"annotations_{timestamp}.jsonl"

            # JSON entries are written straight to the stream; the handler only
            # owns the file
            self.file_handler = logging.FileHandler(log_file)
            self.file_handler.setLevel(logging.DEBUG)
            self.file_handler.setFormatter(logging.Formatter('%(message)s'))
            self.file_handler.addFilter(lambda record: record.levelno == logging.DEBUG)
            self.logger.addHandler(self.file_handler)

            self.log_file = log_file
            self.logger.info(f"Annotation logging enabled: {log_file}")
        else:
            self.log_file = None

    def _write_entry(self, entry: dict[str, Any]) -> None:
        if self.file_handler:
            self.file_handler.stream.write(json.dumps(entry, default=str) + '\n')
            self.file_handler.flush()

    def log_dataset_loaded(
        self,
        dataset: str,
        cache_key: str,
        line_count: int,
        record_count: int,
    ) -> None:
        """Log a reference dataset that was fetched and parsed."""

        self._write_entry({
            "timestamp": datetime.now().isoformat(),
            "event_type": "dataset_loaded",
            "dataset": dataset,
            "cache_key": cache_key,
            "line_count": line_count,
            "record_count": record_count,
        })

        self.logger.info(f"Loaded {dataset}: {record_count} records from {line_count} lines ({cache_key})")

    def log_load_error(self, dataset: str, error: Exception) -> None:
        """Log a failed dataset load."""

        self._write_entry({
            "timestamp": datetime.now().isoformat(),
            "event_type": "load_error",
            "dataset": dataset,
            "error": {
                "type": type(error).__name__,
                "message": str(error),
            },
        })

        self.logger.error(f"Load error: {dataset} - {error}")

    def log_annotation(self, annotator: str, locus: str, output_count: int) -> None:
        """Record the outcome of annotating one variant (file only)."""

        self._write_entry({
            "timestamp": datetime.now().isoformat(),
            "event_type": "annotation",
            "annotator": annotator,
            "locus": locus,
            "output_count": output_count,
        })

    def log_run_summary(self, record_count: int, annotated: dict[str, int]) -> None:
        """Log a summary of a finished run for easy review."""

        summary = f"Annotated {record_count} records"
        for name, count in annotated.items():
            summary += f"\n  • {name}: {count} output records"

        self.logger.info(summary)


# Global logger instance
_global_logger: AnnotationLogger | None = None


def get_logger(log_dir: Path | None = None, enable_file_logging: bool = True) -> AnnotationLogger:
    """Get or create the global annotation logger."""
    global _global_logger

    if _global_logger is None:
        _global_logger = AnnotationLogger(log_dir=log_dir, enable_file_logging=enable_file_logging)

    return _global_logger


def reset_logger() -> None:
    """Reset the global logger (mainly for testing)."""
    global _global_logger

    if _global_logger is not None and _global_logger.file_handler:
        _global_logger.logger.removeHandler(_global_logger.file_handler)
        _global_logger.file_handler.close()
    _global_logger = None
