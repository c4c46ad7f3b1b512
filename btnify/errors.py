"""Project-level exception hierarchy."""


class BtnifyError(Exception):
    """Base for all btnify exceptions."""


class ButtonError(BtnifyError):
    """Button definition is structurally invalid."""


class ConfigError(BtnifyError):
    """Server configuration could not be loaded."""


class BindError(BtnifyError):
    """HTTP server could not bind its listen address."""
