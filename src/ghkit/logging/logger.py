"""
Logger setup and structured event helpers for ghkit.

Everything under the ``ghkit`` logger lands in one daily-rotated file. API
calls and git operations go through dedicated child loggers whose records
carry structured fields (method/url/status, operation/target/outcome) and
are rendered by their own formatters.
"""

import logging
import logging.handlers
import sys
from typing import Any, Dict, Optional

from ghkit.constants import SENSITIVE_KEYS

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import APICallFormatter, GhkitFormatter, GitOperationFormatter
from .utils import cleanup_old_logs, sanitize_data

ROOT_LOGGER = "ghkit"
API_LOGGER = "ghkit.api"
GIT_LOGGER = "ghkit.git"
APP_LOGGER = "ghkit.app"
AUTH_LOGGER = "ghkit.auth"

_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False


def _configured_level() -> Optional[LogLevel]:
    """log_level from settings.json, if it names a level"""
    try:
        from ghkit.utils.config_store import ConfigStore

        return LogLevel.parse(ConfigStore().load_settings().log_level)
    except Exception:
        # logging has to come up even with an unreadable settings file
        return None


def _rotating_handler(
    path, config: LogConfig, level: int, formatter: logging.Formatter
) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        backupCount=config.log_retention_days,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _dedicated_logger(
    name: str, enabled: bool, path, config: LogConfig, formatter: logging.Formatter
) -> None:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.propagate = False
    if enabled:
        logger.addHandler(_rotating_handler(path, config, logging.DEBUG, formatter))


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Configure the ghkit loggers once per process.

    Args:
        config: explicit configuration; by default the level comes from
            settings.json
        force_reconfigure: replace handlers installed by an earlier call
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()
        config.default_level = _configured_level() or config.default_level

    log_file = get_log_file_path(config)
    level = getattr(logging, config.default_level.value)
    sanitize = config.sanitize_sensitive_data

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(
        _rotating_handler(
            log_file,
            config,
            level,
            GhkitFormatter(
                include_timestamps=config.include_timestamps,
                include_process_info=config.include_process_info,
                sanitize_sensitive=sanitize,
                sensitive_keys=config.sensitive_keys,
            ),
        )
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, config.console_level.value))
    console_handler.setFormatter(
        GhkitFormatter(
            include_timestamps=False,
            sanitize_sensitive=sanitize,
            sensitive_keys=config.sensitive_keys,
        )
    )
    root.addHandler(console_handler)

    _dedicated_logger(
        API_LOGGER,
        config.log_api_requests,
        log_file,
        config,
        APICallFormatter(sanitize_sensitive=sanitize, sensitive_keys=config.sensitive_keys),
    )
    _dedicated_logger(
        GIT_LOGGER,
        config.log_git_operations,
        log_file,
        config,
        GitOperationFormatter(sanitize_sensitive=sanitize),
    )

    try:
        cleanup_old_logs(log_file.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True
    get_logger("ghkit.setup").info(
        f"Logging to {log_file} at {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """Cached logger; configures logging on first use"""
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def log_api_call(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    request_size: Optional[int] = None,
    response_size: Optional[int] = None,
    error: Optional[str] = None,
    logger_name: str = API_LOGGER,
) -> None:
    """
    Record one hosting API call.

    Transport errors and 5xx log at ERROR, 4xx at WARNING, the rest at DEBUG.
    """
    extra: Dict[str, Any] = {
        "api_method": method,
        "api_url": url,
        "api_status": status_code,
        "api_duration": duration or 0,
    }
    if request_size is not None:
        extra["api_request_size"] = request_size
    if response_size is not None:
        extra["api_response_size"] = response_size
    if error:
        extra["api_error"] = error

    logger = get_logger(logger_name)
    if error or (status_code and status_code >= 500):
        logger.error("API call failed", extra=extra)
    elif status_code and 400 <= status_code < 500:
        logger.warning("API call client error", extra=extra)
    else:
        logger.debug("API call completed", extra=extra)


def log_git_operation(
    operation: str,
    target: str,
    success: bool = True,
    duration: Optional[float] = None,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = GIT_LOGGER,
) -> None:
    """Record one git operation (clone, push, fetch) against a repository or URL"""
    extra: Dict[str, Any] = {
        "git_operation": operation,
        "git_target": target,
        "git_success": success,
        "git_duration": duration or 0,
    }
    if details:
        extra["git_details"] = sanitize_data(details, SENSITIVE_KEYS)

    logger = get_logger(logger_name)
    if success:
        logger.info("Git operation completed", extra=extra)
    else:
        logger.error("Git operation failed", extra=extra)


def log_application_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = APP_LOGGER,
) -> None:
    """Command-level events such as new_succeeded or forkcommand_failed"""
    extra: Dict[str, Any] = {"app_event": event}
    if details:
        extra["app_details"] = sanitize_data(details, SENSITIVE_KEYS)

    logger = get_logger(logger_name)
    getattr(logger, level.lower(), logger.info)(f"Application: {event}", extra=extra)


def log_authentication_event(
    source: str,
    success: bool,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = AUTH_LOGGER,
) -> None:
    """
    Record whether the hosting API accepted a token.

    Args:
        source: where the token came from (explicit, environment, ...)
        success: whether the "who am I" call succeeded
        details: extra context, always sanitized
    """
    extra: Dict[str, Any] = {"auth_source": source, "auth_success": success}
    if details:
        extra["auth_details"] = sanitize_data(details, SENSITIVE_KEYS)

    logger = get_logger(logger_name)
    if success:
        logger.info(f"Token accepted from {source}", extra=extra)
    else:
        logger.warning(f"Token rejected from {source}", extra=extra)
