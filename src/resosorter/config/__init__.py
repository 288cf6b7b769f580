from .config import (
    Config,
    DedupConfig,
    FetchConfig,
    MonitoringConfig,
    PreferencesConfig,
    RankingConfig,
    SourceConfig,
    find_config_file,
    load_config,
    settings,
)

__all__ = [
    "Config",
    "DedupConfig",
    "FetchConfig",
    "MonitoringConfig",
    "PreferencesConfig",
    "RankingConfig",
    "SourceConfig",
    "find_config_file",
    "load_config",
    "settings",
]
