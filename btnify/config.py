"""Server configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from btnify.errors import ConfigError
from btnify.page import DEFAULT_TITLE

logger = logging.getLogger(__name__)


class ServerConfig(BaseModel):
    """Settings for the button page HTTP server."""

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=0, le=65535)
    title: str = DEFAULT_TITLE
    max_body_bytes: int = Field(default=65536, gt=0)
    install_signal_handlers: bool = True


def load_config(config_path: Path) -> ServerConfig:
    """Load a `ServerConfig` from a JSON file; defaults when the file is missing."""
    if not config_path.exists():
        logger.info("No config at %s, using defaults", config_path)
        return ServerConfig()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        msg = f"cannot read config {config_path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"config {config_path} must contain a JSON object"
        raise ConfigError(msg)
    try:
        config = ServerConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"invalid config {config_path}: {exc}"
        raise ConfigError(msg) from exc
    logger.info("Loaded config from %s", config_path)
    return config
