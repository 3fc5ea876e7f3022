"""Root settings model for slotmanager configuration."""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from slotmanager.config.models.observability import ObservabilityConfig
from slotmanager.config.models.storage import StorageConfig

DEFAULT_LOOKUP_ENDPOINT = "https://slot-manager.phantasm.solutions"
DEFAULT_PERSISTENCE_KEY = "slot_manager_config"

# Module-level variable to store TOML config for settings source
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the TOML config values."""
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. default.toml in the configured directory (base configuration)
    3. {SLOTMANAGER_ENV}.toml in that directory (environment overrides)
    4. SLOTMANAGER_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="SLOTMANAGER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    lookup_endpoint: str = Field(
        default=DEFAULT_LOOKUP_ENDPOINT,
        description="Base URL of the slot-manager lookup service",
    )
    persistence_key: str = Field(
        default=DEFAULT_PERSISTENCE_KEY,
        description="Store key for the cached resolution",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Lookup request timeout in seconds",
    )

    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Cached resolution persistence",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @field_validator("lookup_endpoint", "persistence_key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include TOML config.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (SLOTMANAGER_* environment variables)
        3. toml_settings (config/*.toml files)
        4. (defaults from model)
        """
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
