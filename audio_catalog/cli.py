from __future__ import annotations

import argparse
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .config import ConfigError, Settings, load_settings
from .models import LibraryFile
from .service import AudioTagService

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(settings: Settings, level_override: Optional[str] = None) -> WarningBufferHandler:
    level_name = (level_override or settings.logging.level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler(sys.stderr)
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)

    if settings.logging.warnings_log:
        file_handler = logging.FileHandler(settings.logging.warnings_log, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.WARNING)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)

    for name in settings.logging.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
    return warn_buffer


def run(
    paths: Sequence[Path],
    settings: Settings,
    service: Optional[AudioTagService] = None,
    out: TextIO = sys.stdout,
) -> List[LibraryFile]:
    service = service or AudioTagService()
    files = [LibraryFile.from_path(path) for path in paths]
    with ThreadPoolExecutor(max_workers=settings.processing.worker_concurrency) as pool:
        list(pool.map(service.update_metadata, files))

    for file in files:
        if file.metadata is None:
            if not settings.output.skip_unsupported:
                print(json.dumps({"path": str(file.path), "skipped": True}), file=out)
            continue
        payload = {"path": str(file.path), "metadata": file.metadata.to_record()}
        print(json.dumps(payload, indent=settings.output.indent, ensure_ascii=False), file=out)
    return files


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Normalize audio tags into catalog records")
    parser.add_argument("--config", type=Path, help="Path to audio-catalog.yaml")
    parser.add_argument("--log-level", default=None, help="Python logging level")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files read in parallel (overrides processing.worker_concurrency)",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Audio files to read")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        parser.error(str(exc))
    if args.workers is not None:
        if args.workers < 1:
            parser.error("--workers must be at least 1")
        settings.processing.worker_concurrency = args.workers

    warn_buffer = configure_logging(settings, args.log_level)
    try:
        run(args.files, settings)
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m", file=sys.stderr)
            for line in warn_buffer.records:
                print(f" - {line}", file=sys.stderr)
            if settings.logging.warnings_log:
                print(f"\nFull warning log: {settings.logging.warnings_log}", file=sys.stderr)


if __name__ == "__main__":
    main()
