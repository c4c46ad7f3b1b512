"""btnify: serve a handful of Python functions as buttons on a web page."""

from btnify.button import Button, HandlerVariant
from btnify.config import ServerConfig, load_config
from btnify.dispatch import Dispatcher
from btnify.errors import BindError, BtnifyError, ButtonError, ConfigError
from btnify.logging_config import setup_logging
from btnify.models import ClickRequest, ClickResponse
from btnify.registry import Registry
from btnify.server import BtnifyServer, bind_server
from btnify.shutdown import ShutdownConfig, ShutdownCoordinator

__all__ = [
    "BindError",
    "BtnifyError",
    "BtnifyServer",
    "Button",
    "ButtonError",
    "ClickRequest",
    "ClickResponse",
    "ConfigError",
    "Dispatcher",
    "HandlerVariant",
    "Registry",
    "ServerConfig",
    "ShutdownConfig",
    "ShutdownCoordinator",
    "bind_server",
    "load_config",
    "setup_logging",
]
