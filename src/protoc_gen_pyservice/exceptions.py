"""Exception hierarchy for protoc-gen-pyservice.

All exceptions derive from PluginError, so the plugin entry point can turn
any of them into a diagnostic and a non-zero exit status. Every failure is
fatal to the whole request: nothing is written to stdout.
"""


class PluginError(Exception):
    """Base exception for all protoc-gen-pyservice errors."""


class ConfigValidationError(PluginError):
    """The plugin parameter string could not be turned into a config.

    Raised for unknown option keys and for values that fail validation.
    """


class RequestReadError(PluginError):
    """The CodeGeneratorRequest bytes could not be read from stdin."""


class RequestDecodeError(PluginError):
    """The bytes read from stdin are not a valid CodeGeneratorRequest."""


class RenderError(PluginError):
    """Rendered stub code failed formatting or is not valid Python.

    This indicates a mismatch between the templates and the descriptor data
    (for example a method name that is a Python keyword), never a
    recoverable condition.
    """


class ResponseEncodeError(PluginError):
    """The CodeGeneratorResponse could not be serialized or written."""
