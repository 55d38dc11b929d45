"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from graalbuild.core.config.loader import ConfigLoader
from graalbuild.core.exceptions.errors import ConfigurationError

DEFAULT_CONFIG_FILE = Path("graalbuild.yaml")


class NativeImageSettings(BaseSettings):
    """Options of the native-image build step."""

    model_config = SettingsConfigDict(
        env_prefix="GRAALBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    skip: bool = Field(
        default=False,
        description="Skip native-image generation entirely",
    )
    main_class: str | None = Field(
        default=None,
        description="Application entry point ('.' disables the -H:Class flag)",
    )
    image_name: str | None = Field(
        default=None,
        description="Name of the produced binary",
    )
    build_args: list[str] = Field(
        default_factory=list,
        description="Extra native-image arguments, each split on whitespace",
    )
    docker_image: str | None = Field(
        default=None,
        description="Run native-image inside this container image",
    )
    docker_entry_point: str | None = Field(
        default=None,
        description="Custom container entry point",
    )
    container_runtime: str = Field(
        default="docker",
        description="Container runtime command",
    )
    volumes: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra host:container bind mounts",
    )
    disable_automatic_volumes: bool = Field(
        default=False,
        description="Do not mount home, output and local repository",
    )
    enforce_uid: bool = Field(
        default=False,
        description="Fail when the container uid/gid cannot be determined",
    )
    output_directory: Path | None = Field(
        default=None,
        description="Build output directory and working directory (defaults to the project build directory)",
    )
    local_repository: Path | None = Field(
        default=None,
        description="Local artifact repository to mount into the container",
    )
    java_home: Path | None = Field(
        default=None,
        description="GraalVM home holding the native-image executable",
    )
    expected_version: str | None = Field(
        default=None,
        description="Version compared against native-image (defaults to ours)",
    )

    @field_validator("docker_image", "docker_entry_point", mode="before")
    @classmethod
    def validate_trimmed(cls, v: str | None) -> str | None:
        """Trim container selectors; blank means unset."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("build_args", mode="before")
    @classmethod
    def validate_build_args(cls, v: Any) -> list[str]:
        """Accept a single string as one argument group."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("output_directory", "local_repository", "java_home", mode="before")
    @classmethod
    def validate_optional_path(cls, v: str | None) -> Path | None:
        """Validate and convert optional paths."""
        if v is None or v == "":
            return None
        return Path(v)

    @property
    def uses_container(self) -> bool:
        """Whether native-image runs inside a container."""
        return self.docker_image is not None


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="GRAALBUILD_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GRAALBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    native_image: NativeImageSettings = Field(default_factory=NativeImageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.

        Raises:
            ConfigurationError: If the file is unreadable or holds invalid values.
        """
        loader = ConfigLoader(path)
        loader.load()

        try:
            return cls(
                native_image=NativeImageSettings(**loader.get_section("native_image")),
                logging=LoggingSettings(**loader.get_section("logging")),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid settings in {path}",
                config_key=str(path),
                details={"errors": e.errors(include_url=False)},
            ) from e

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from an explicit file or default locations.

        Priority: explicit file > ./graalbuild.yaml > environment/.env > defaults

        Args:
            path: Optional YAML file.

        Returns:
            Settings instance.
        """
        if path is not None:
            return cls.from_yaml(path)
        if DEFAULT_CONFIG_FILE.exists():
            return cls.from_yaml(DEFAULT_CONFIG_FILE)
        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
