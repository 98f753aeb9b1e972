from loguru import logger
import sys
from src.utils.context import editor_session_id, session_id
from common import global_config
from human_id import generate_id
import os

_logging_initialized = False

LOCAL_REPLICA = "local"


def _should_show_location(level: str) -> bool:
    """Determine if location should be shown for given log level"""
    level = level.lower()
    config = global_config.logging.format.location

    if not config.enabled:
        return False

    level_map = {
        "info": config.show_for_info,
        "debug": config.show_for_debug,
        "warning": config.show_for_warning,
        "error": config.show_for_error,
    }

    return level_map.get(level, True)


def _get_replica_id() -> str:
    """Short replica tag so interleaved logs from several workers stay readable"""
    raw_id = os.getenv("RAILWAY_REPLICA_ID") or os.getenv("HOSTNAME")
    if not raw_id:
        return LOCAL_REPLICA

    try:
        numeric_id = int(raw_id[-4:], 16) % 100
        return f"r{numeric_id}"
    except (ValueError, TypeError):
        return raw_id[-6:]


def _get_session_color(current_session: str) -> str:
    """Get a consistent color for a given session ID"""
    if current_session == "---":
        return "white"

    colors = ["green", "yellow", "blue", "magenta", "cyan", "red"]
    numeric_id = sum(ord(c) for c in current_session[-8:])
    return colors[numeric_id % len(colors)]


def _build_format_string(record: dict) -> str:
    """Build format string dynamically based on log level"""
    format_parts = ["<level>{level: <6}</level>"]

    if global_config.logging.format.show_time:
        format_parts.append("{time:HH:mm:ss}")

    if global_config.logging.format.show_session_id:
        session_color = _get_session_color(record["extra"]["session_id"])
        format_parts.append(f"<{session_color}>{{extra[session_id]}}</{session_color}>")

    format_parts.append("<magenta>{extra[replica_id]}</magenta>")

    if _should_show_location(record["level"].name):
        location_parts = []
        config = global_config.logging.format.location

        if config.show_file:
            location_parts.append("<cyan>{file.name}</cyan>")
        if config.show_function:
            location_parts.append("<cyan>{function}</cyan>")
        if config.show_line:
            location_parts.append("<cyan>{line}</cyan>")

        if location_parts:
            format_parts.append(":".join(location_parts))

    format_parts.append("<level>{message}</level>{exception}")
    return " | ".join(format_parts) + "\n"


def _should_log_level(level: str, overrides: dict | None = None) -> bool:
    """Determine if this log level should be shown based on config and overrides"""
    level = level.lower()

    if overrides and level in overrides:
        return overrides[level]

    try:
        return getattr(global_config.logging.levels, level)
    except AttributeError:
        return True


def setup_logging(*, debug=None, info=None, warning=None, error=None, critical=None):
    """Setup centralized logging configuration with optional level overrides

    Log lines carry the editor session being served when one is bound,
    otherwise the process-wide session id generated at startup.

    Args:
        debug (bool, optional): Override global debug log level
        info (bool, optional): Override global info log level
        warning (bool, optional): Override global warning log level
        error (bool, optional): Override global error log level
        critical (bool, optional): Override global critical log level
    """
    global _logging_initialized

    if _logging_initialized:
        return

    logger.remove()

    if session_id.get() is None:
        session_id.set(generate_id())

    overrides = {
        name: value
        for name, value in (
            ("debug", debug),
            ("info", info),
            ("warning", warning),
            ("error", error),
            ("critical", critical),
        )
        if value is not None
    }

    def log_filter(record):
        if "extra" not in record:
            record["extra"] = {}
        record["extra"]["session_id"] = (
            editor_session_id.get() or session_id.get() or "---"
        )
        record["extra"]["replica_id"] = _get_replica_id()

        return _should_log_level(record["level"].name, overrides)

    logger.add(
        sys.stderr,
        format=lambda record: _build_format_string(record),
        colorize=True,
        enqueue=True,
        backtrace=True,
        diagnose=True,
        catch=True,
        filter=log_filter,
    )

    _logging_initialized = True
