"""Configuration for cartpilot runs.

Values come from a Java-style ``.properties`` file, then ``CARTPILOT_*``
environment variables, then explicit overrides (CLI options), in that order.
"""
import configparser
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type, Union

from pydantic import Field, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("config") / "config.properties"
_SECTION = "properties"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or a value is invalid."""
    pass


class PropertyConfig:
    """Key/value access to a ``key=value`` properties file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self._parser = configparser.ConfigParser(interpolation=None, delimiters=("=", ":"))
        self._parser.optionxform = str
        self._parser.add_section(_SECTION)
        if self.path is not None:
            self.load(self.path)

    def load(self, path: Union[str, Path]) -> None:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read properties file {path}: {e}") from e
        try:
            self._parser.read_string(f"[{_SECTION}]\n{text}", source=str(path))
        except configparser.Error as e:
            raise ConfigError(f"Malformed properties file {path}: {e}") from e

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._parser.get(_SECTION, key, fallback=default)

    def set(self, key: str, value: str) -> None:
        self._parser.set(_SECTION, key, value)

    def contains(self, key: str) -> bool:
        return self._parser.has_option(_SECTION, key)

    def remove(self, key: str) -> None:
        self._parser.remove_option(_SECTION, key)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._parser.items(_SECTION))

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        target = Path(path) if path else self.path
        if target is None:
            raise ConfigError("No path given to save properties to")
        target.parent.mkdir(parents=True, exist_ok=True)
        lines = ["# Updated properties"]
        lines.extend(f"{key}={value}" for key, value in self.as_dict().items())
        target.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return target


# Settings field -> key in the properties file, kept compatible with the
# camelCase names of the suite
_PROPERTY_KEYS = {
    "base_url": "baseURL",
    "browser": "browser",
    "headless": "headless",
    "timeout": "timeout",
    "poll_interval": "pollInterval",
    "report_dir": "reportDir",
    "product": "product",
    "quantity": "quantity",
}


class PropertiesSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a ``.properties`` file."""

    def __init__(self, settings_cls: Type[BaseSettings], path: Optional[Union[str, Path]]):
        super().__init__(settings_cls)
        self.properties = PropertyConfig(path) if path else None

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        key = _PROPERTY_KEYS.get(field_name)
        if self.properties is None or key is None:
            return None, field_name, False
        return self.properties.get(key), key, False

    def __call__(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, _, _ = self.get_field_value(field, field_name)
            if value is not None:
                data[field_name] = value.strip()
        return data


class Settings(BaseSettings):
    """Resolved settings for one run."""

    model_config = SettingsConfigDict(
        env_prefix="CARTPILOT_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(default="https://www.amazon.com", description="Storefront home page URL")
    browser: str = Field(default="chrome", description="chrome, firefox or edge")
    headless: bool = Field(default=False, description="Run the browser without a window")
    timeout: float = Field(default=10.0, gt=0, description="Seconds every interaction waits")
    poll_interval: float = Field(default=0.5, gt=0, description="Seconds between wait polls")
    report_dir: str = Field(default="test-output/reports", description="Where reports are written")
    product: str = Field(default="laptop", description="Product to search for")
    quantity: Optional[str] = Field(default=None, description="Quantity to set on the product page")
    config_path: Optional[Path] = Field(default=None, description="Properties file the values came from")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        path = init_settings.init_kwargs.get("config_path")
        return (init_settings, env_settings, PropertiesSettingsSource(settings_cls, path))

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None, **overrides: Any) -> "Settings":
        """Resolve settings from file, environment and explicit overrides.

        A missing default config file is fine; an explicitly named one must
        exist. ``None`` overrides are ignored.
        """
        if path is None and DEFAULT_CONFIG_PATH.exists():
            path = DEFAULT_CONFIG_PATH
        kwargs = {name: value for name, value in overrides.items() if value is not None}
        if path is not None:
            kwargs["config_path"] = Path(path)
        try:
            return cls(**kwargs)
        except ValidationError as e:
            problems = "; ".join(
                f"Invalid value for {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigError(problems) from e
