"""Configuration system for protoc-gen-pyservice.

Uses pydantic-settings for declarative configuration. protoc plugins take no
command-line flags and the plugin reads no environment variables: the only
source is the parameter string protoc forwards from ``--pyservice_opt``,
e.g. ``line_length=100,class_name=Greeter``. Settings sources are therefore
restricted to init kwargs.
"""

from __future__ import annotations

import keyword
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from protoc_gen_pyservice.exceptions import ConfigValidationError

_LOG_LEVELS: frozenset[str] = frozenset({"debug", "info", "warning", "error"})


class PluginConfig(BaseSettings):
    """Options accepted through the protoc plugin parameter.

    Resolution order: init kwargs -> field defaults.
    """

    model_config = SettingsConfigDict(
        extra="forbid",
        frozen=True,
    )

    line_length: int = Field(
        default=88,
        ge=20,
        description="Line length passed to black when formatting stubs",
    )
    log_level: str = Field(
        default="warning",
        description="Diagnostic verbosity on stderr: 'debug', 'info', 'warning', 'error'",
    )
    class_name: str = Field(
        default="Service",
        description="Name of the generated servicer class",
    )
    include_imports: bool = Field(
        default=True,
        description="Generate stubs for services of every file in the request, "
        "not only the files protoc was asked to generate",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return value

    @field_validator("class_name")
    @classmethod
    def _check_class_name(cls, value: str) -> str:
        if not value.isidentifier() or keyword.iskeyword(value):
            raise ValueError(f"class_name must be a valid Python identifier, got {value!r}")
        return value


_ALL_FIELDS: frozenset[str] = frozenset(PluginConfig.model_fields.keys())


def parse_parameter(parameter: str) -> dict[str, str]:
    """Split a protoc parameter string into option pairs.

    Options are comma-separated ``key=value`` pairs. A bare ``key`` is
    shorthand for ``key=true``. Surrounding whitespace is ignored.

    Args:
        parameter: Raw ``CodeGeneratorRequest.parameter`` value.

    Returns:
        Mapping of option name to raw string value, in input order.

    Raises:
        ConfigValidationError: If an option has an empty key.
    """
    options: dict[str, str] = {}
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        if not key:
            raise ConfigValidationError(f"Malformed plugin option: {item!r}")
        options[key] = value.strip() if sep else "true"
    return options


def load_config(parameter: str | None = None) -> PluginConfig:
    """Build a PluginConfig from the protoc parameter string.

    Args:
        parameter: Raw ``CodeGeneratorRequest.parameter``; ``None`` or empty
            yields the defaults.

    Returns:
        Validated, immutable configuration.

    Raises:
        ConfigValidationError: If an option is unknown or fails validation.
    """
    options: dict[str, Any] = parse_parameter(parameter or "")
    for key in options:
        if key not in _ALL_FIELDS:
            available = ", ".join(sorted(_ALL_FIELDS))
            raise ConfigValidationError(f"Unknown plugin option: {key!r}. Available: {available}")
    try:
        return PluginConfig(**options)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid plugin options: {exc}") from exc
