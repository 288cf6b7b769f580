"""
Configuration management for ResoSorter using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, List, Literal, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

SortKeyName = Literal["original", "width", "height", "area", "link"]

# --- Nested Configuration Models ---


class DedupConfig(BaseModel):
    """Configuration for candidate canonicalization."""

    fold_separators: bool = Field(
        default=True,
        description="Ignore '.' and ',' thousands separators when comparing tokens.",
    )


class RankingConfig(BaseModel):
    """Initial ordering of the record table."""

    default_key: SortKeyName = Field(default="area", description="Key used for the initial ordering.")
    default_ascending: bool = Field(default=False, description="Direction of the initial ordering.")


class SourceConfig(BaseModel):
    """Configuration for the HTML fragment source."""

    parser: Literal["html.parser", "lxml", "html5lib"] = Field(
        default="html.parser", description="BeautifulSoup tree builder."
    )
    skip_tags: List[str] = Field(
        default_factory=lambda: ["script", "style", "noscript", "template"],
        description="Elements whose text is never scanned.",
    )


class FetchConfig(BaseModel):
    """HTTP settings used when a page is fetched by URL."""

    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds.")
    user_agent: str = Field(
        default="ResoSorter/0.1 (+https://pypi.org/project/resosorter/)",
        description="User-Agent string for HTTP requests.",
    )
    follow_redirects: bool = True


class PreferencesConfig(BaseModel):
    """Location of the persisted UI preferences."""

    path: Path = Field(
        default_factory=lambda: Path.home() / ".resosorter" / "preferences.json",
        description="JSON file holding theme and collapsed state.",
    )


class MonitoringConfig(BaseModel):
    """Configuration for logging and metrics."""

    log_level: str = Field(default="WARNING", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to stderr.")
    metrics_enabled: bool = Field(default=True, description="Record Prometheus metrics during scans.")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "ResoSorter"
    version: str = "0.1.0"
    dedup: DedupConfig = Field(default_factory=DedupConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="RESO_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls()
        if not isinstance(yaml_data, dict):
            raise ValueError(f"Configuration file must contain a mapping, got {type(yaml_data).__name__}: {path}")
        return cls(**yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    paths_to_check = [
        current_dir / "resosorter.yaml",
        current_dir / "resosorter.yml",
        current_dir / "config.yaml",
        current_dir / "config.yml",
    ]
    for path in paths_to_check:
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load an explicit config file, or discover one, or fall back to defaults."""
    if path is not None:
        return Config.from_yaml(path)
    discovered = find_config_file()
    if discovered is not None:
        return Config.from_yaml(discovered)
    return Config()


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    A proxy for the Config object that delays its loading and validation
    until an attribute is first accessed. This prevents configuration errors
    from crashing the application on import.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        if self.__class__._config is None:
            with self.__class__._lock:
                if self.__class__._config is None:
                    self.__class__._config = self._load_config_with_fallback()
        return getattr(self.__class__._config, name)

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded configuration so the next access reloads it."""
        with cls._lock:
            cls._config = None

    def _load_config_with_fallback(self) -> Config:
        """Load configuration from file or fall back to defaults."""
        config_path = find_config_file()
        if config_path:
            try:
                log.info("Lazy loading configuration from: %s", config_path)
                return Config.from_yaml(config_path)
            except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
                log.error(
                    "Failed to load or validate configuration from '%s': %s. "
                    "Falling back to default settings. Please check your config file.",
                    config_path,
                    e,
                    exc_info=log.getEffectiveLevel() <= logging.DEBUG,
                )
        else:
            log.debug("No config file found. Using default settings for lazy load.")

        try:
            return Config()
        except ValidationError as e:
            log.critical("FATAL: Default configuration is invalid: %s", e, exc_info=True)
            raise RuntimeError(f"Default configuration is invalid, cannot start: {e}") from e


# --- Global Settings Instance ---
settings: "Config" = cast("Config", LazyConfig())
