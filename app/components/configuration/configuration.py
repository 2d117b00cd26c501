from pathlib import Path
from typing import Any, Optional, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from app.components.configuration.configuration_interface import (
    ConfigurationInterface,
)

T = TypeVar("T")


class AppSettings(BaseSettings):
    """
    Settings known to the application. Environment variables take precedence
    over the values read from the environment's YAML file, which are passed
    as init arguments. Keys not declared here are kept as file-only extras.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_ignore_empty=True,
        extra="allow",
    )

    MODEL_NAME: Optional[str] = None
    EMPTY_TEXT_PLACEHOLDER: Optional[str] = None
    FAILURE_MESSAGE: Optional[str] = None
    MAX_IMAGE_BYTES: Optional[int] = None
    MAX_PENDING_IMAGES: Optional[int] = None
    REQUEST_TIMEOUT_SECONDS: Optional[float] = None
    SESSION_IDLE_SECONDS: Optional[float] = None
    LOG_LEVEL: Optional[str] = None
    LOG_FORMAT: Optional[str] = None
    HOST: Optional[str] = None
    PORT: Optional[int] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (env_settings, init_settings)


class Configuration(ConfigurationInterface):
    """
    Layered configuration: ``<config_path>/<env>.yaml`` under environment
    variables, validated through ``AppSettings``.
    """

    def __init__(self, env: str, config_path: str) -> None:
        self.__env: str = env
        self.__config_path: str = config_path
        self.__settings: AppSettings = AppSettings(**self.__load_file())

    def __load_file(self) -> dict[str, Any]:
        file_path = Path(self.__config_path) / f"{self.__env}.yaml"
        if not file_path.exists():
            return {}

        with file_path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration file {file_path} must contain a mapping at the top level"
            )

        return {str(key): value for key, value in data.items()}

    def get_environment(self) -> str:
        return self.__env

    def get_configuration(
        self, key: str, value_type: type[T], default: Any = None
    ) -> T:
        raw = self.__settings.model_dump().get(key)
        if raw is None:
            if default is not None:
                return default
            raise ValueError(f"Configuration key {key} not found")

        try:
            return TypeAdapter(value_type).validate_python(raw)
        except ValidationError as exc:
            raise ValueError(
                f"Configuration key {key} cannot be read as {value_type.__name__}: {raw!r}"
            ) from exc
