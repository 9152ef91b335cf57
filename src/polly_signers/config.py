# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
import os
from collections.abc import Mapping
from typing import Any, ClassVar, Final, Literal

from .exceptions import ConfigurationError

logger: Final = logging.getLogger(__name__)

SOURCE_CONSTRUCTOR = "constructor"
SOURCE_ENVIRONMENT = "environment"
SOURCE_DEFAULT = "default"

SourceType = Literal["constructor", "environment", "default"]

DEFAULT_REGION = "us-east-1"
DEFAULT_SERVICE = "polly"


class ConfigValue:
    """Configuration value with metadata about its source"""

    def __init__(self, value: Any, source: SourceType):
        self.value = value
        self.source = source

    def __repr__(self) -> str:
        return f"ConfigValue(value={self.value!r}, source={self.source!r})"


class PollySigningConfig:
    """Region, service and endpoint used to sign Polly requests.

    Each value is taken from the constructor argument, then the environment, then
    the default, and the source it came from is kept for :py:meth:`source_of`.

    Degenerate values such as an empty region are accepted unless ``validate`` is
    set; they sign fine but are rejected by the service.
    """

    CONFIG_FIELDS: ClassVar[dict[str, dict[str, Any]]] = {
        "region": {
            "default": DEFAULT_REGION,
            "env_vars": ("AWS_REGION", "AWS_DEFAULT_REGION"),
        },
        "service": {
            "default": DEFAULT_SERVICE,
        },
        "endpoint_url": {
            "default": None,
            "env_vars": ("AWS_ENDPOINT_URL_POLLY",),
        },
    }

    def __init__(
        self,
        *,
        region: str = ...,  # type: ignore[assignment]
        service: str = ...,  # type: ignore[assignment]
        endpoint_url: str | None = ...,  # type: ignore[assignment]
        validate: bool = False,
    ):
        self._constructor_values = {
            k: v
            for k, v in locals().items()
            if k not in ("self", "validate") and v is not ...
        }
        self._validate = validate
        self._values: dict[str, ConfigValue] = {}

    def resolve(
        self, *, environment: Mapping[str, str] | None = None
    ) -> "PollySigningConfig":
        """Resolve configuration from all sources.

        :param environment: Environment variables to read. Defaults to
            ``os.environ``.
        """
        env_values = os.environ if environment is None else environment
        values = {
            field_name: self._resolve_field(field_name, field_info, env_values)
            for field_name, field_info in self.CONFIG_FIELDS.items()
        }
        if self._validate:
            self._validate_values(values)

        for field_name, value in values.items():
            logger.debug("Resolved %s from %s.", field_name, value.source)
        self._values = values
        return self

    @property
    def region(self) -> str:
        return self._get("region")

    @property
    def service(self) -> str:
        return self._get("service")

    @property
    def endpoint_url(self) -> str | None:
        return self._get("endpoint_url")

    def source_of(self, field_name: str) -> SourceType:
        """Report where the value of ``field_name`` came from."""
        self._ensure_resolved()
        return self._values[field_name].source

    def _get(self, field_name: str) -> Any:
        self._ensure_resolved()
        return self._values[field_name].value

    def _ensure_resolved(self) -> None:
        if not self._values:
            self.resolve()

    def _resolve_field(
        self,
        field_name: str,
        field_info: dict[str, Any],
        env_values: Mapping[str, str],
    ) -> ConfigValue:
        if field_name in self._constructor_values:
            return ConfigValue(self._constructor_values[field_name], SOURCE_CONSTRUCTOR)

        for env_var in field_info.get("env_vars", ()):
            if env_values.get(env_var):
                return ConfigValue(env_values[env_var], SOURCE_ENVIRONMENT)

        return ConfigValue(field_info["default"], SOURCE_DEFAULT)

    def _validate_values(self, values: dict[str, ConfigValue]) -> None:
        for field_name in ("region", "service"):
            value = values[field_name].value
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"{field_name} must be a non-empty string")
        endpoint_url = values["endpoint_url"].value
        if endpoint_url is not None and not isinstance(endpoint_url, str):
            raise ConfigurationError(
                f"endpoint_url must be str, got {type(endpoint_url).__name__}"
            )
