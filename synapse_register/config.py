#!/usr/bin/env python3
"""
Configuration loading and logging setup for the registration CLI.
"""
import json
import logging
import math
import os
import time
from typing import Any, Dict, Optional

from synapse_register.core.exceptions import ConfigError
from synapse_register.core.types import DEFAULT_TIMEOUT_SECONDS, RegistrationConfig

# Config field -> environment variable
ENV_VARS = {
    "homeserver_url": "MATRIX_HOMESERVER_URL",
    "shared_secret": "MATRIX_REGISTRATION_SHARED_SECRET",
    "username": "MATRIX_USERNAME",
    "password": "MATRIX_PASSWORD",
    "display_name": "MATRIX_DISPLAY_NAME",
    "admin": "MATRIX_ADMIN",
    "timeout": "MATRIX_REGISTER_TIMEOUT",
}

REQUIRED_FIELDS = ("homeserver_url", "shared_secret", "username", "password", "display_name")

CLI_FLAGS = {
    "homeserver_url": "--homeserver",
    "shared_secret": "--secret",
    "username": "--username",
    "password": "--password",
    "display_name": "--display-name",
}

TRUE_VALUES = ["true", "1", "yes", "on"]


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def parse_timeout(value: Any) -> Optional[float]:
    """Parse a timeout in seconds; 0 means wait indefinitely"""
    if value is None or value == "":
        return DEFAULT_TIMEOUT_SECONDS
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout: {value!r}")
    if not math.isfinite(seconds):
        raise ConfigError(f"Timeout must be a finite number: {value!r}")
    if seconds < 0:
        raise ConfigError(f"Timeout must not be negative: {value!r}")
    return seconds or None


def load_config(overrides: Optional[Dict[str, Any]] = None, environ: Optional[Dict[str, str]] = None) -> RegistrationConfig:
    """Build a RegistrationConfig from environment variables and overrides

    Args:
        overrides: Values from the command line; None entries fall back to the environment
        environ: Environment mapping, defaults to os.environ

    Raises:
        ConfigError: If a required value is missing or a value is invalid
    """
    environ = os.environ if environ is None else environ
    overrides = overrides or {}

    values: Dict[str, Any] = {}
    for name, env_var in ENV_VARS.items():
        value = overrides.get(name)
        if value is None:
            value = environ.get(env_var)
        values[name] = value

    missing = [name for name in REQUIRED_FIELDS if not values[name]]
    if missing:
        flags = ", ".join(CLI_FLAGS[name] for name in missing)
        raise ConfigError(f"Missing required configuration: {flags}", missing=missing)

    return RegistrationConfig(
        homeserver_url=values["homeserver_url"],
        shared_secret=values["shared_secret"],
        username=values["username"],
        password=values["password"],
        display_name=values["display_name"],
        admin=parse_bool(values["admin"]) if values["admin"] is not None else False,
        timeout=parse_timeout(values["timeout"]),
    )


class JSONFormatter(logging.Formatter):
    """One JSON object per log record"""

    RESERVED = {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message",
    }

    def format(self, record):
        log_entry = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)) + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in self.RESERVED:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def setup_logging(log_level: str = "INFO", json_format: bool = False) -> logging.Logger:
    """Configure the synapse_register logger hierarchy"""
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ConfigError(f"Invalid log level: {log_level!r}")

    logger = logging.getLogger("synapse_register")
    logger.setLevel(level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)

    return logger
