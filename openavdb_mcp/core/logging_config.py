from pathlib import Path
import logging
import sys
from typing import Optional
from datetime import datetime

from openavdb_mcp.core.config import get_config


def setup_logging(logs_dir: Optional[str | Path] = None, log_file_name: str = "server.log") -> logging.Logger:
    """Configure root logging to stderr and a file under `logs_dir`.

    Idempotent: calling multiple times won't add duplicate handlers.
    stdout is reserved for the MCP stdio transport, so the stream handler
    always writes to stderr. Level and default directory come from config.
    Returns a module-level logger for callers to use.
    """
    cfg = get_config() or {}
    if logs_dir is None:
        logs_dir = Path(cfg.get("log_dir") or Path.home() / ".openavdb" / "logs")
    else:
        logs_dir = Path(logs_dir)

    level = logging.getLevelName(str(cfg.get("log_level", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    # Ensure logs directory exists
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # best-effort: the file handler below will be skipped
        pass

    # Add timestamp to the logfile name so each run writes to a timestamped file
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base = Path(log_file_name).stem
    ext = Path(log_file_name).suffix or ".log"
    log_file = logs_dir / f"{base}_{timestamp}{ext}"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    # Only one file handler per server process, whatever its timestamp
    file_handler_exists = any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename).parent == logs_dir.resolve()
        for h in root_logger.handlers
    )

    if not file_handler_exists:
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(formatter)
            fh.setLevel(level)
            root_logger.addHandler(fh)
        except OSError:
            # If file handler cannot be created (permissions, etc), fall back to stderr only
            pass

    stream_stderr_exists = any(
        type(h) is logging.StreamHandler and getattr(h, "stream", None) is sys.stderr
        for h in root_logger.handlers
    )

    if not stream_stderr_exists:
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(formatter)
        sh.setLevel(level)
        root_logger.addHandler(sh)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    return logging.getLogger("openavdb_mcp")
