from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


DEFAULT_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_FMT = "%(asctime)s | %(levelname)s | %(message)s"


def setup(
    log_dir: str | None = "logs",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    filename: str = "transacto.log",
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> None:
    root = logging.getLogger()
    # install once per process
    if getattr(root, "_transacto_logging_installed", False):
        return

    root.setLevel(logging.DEBUG)

    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter(CONSOLE_FMT))
    root.addHandler(ch)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            Path(log_dir) / filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(DEFAULT_FMT))
        root.addHandler(fh)

    logging.getLogger("urllib3").setLevel(logging.WARNING)

    for name in ("rpc", "client", "preflight", "export", "cli"):
        logging.getLogger(name).setLevel(logging.INFO)

    root._transacto_logging_installed = True  # type: ignore[attr-defined]
