from .models import DEFAULT_PROVIDER, ProviderSettings, Settings
from .store import SettingsStore, coerce_value, default_config_path

__all__ = [
    "DEFAULT_PROVIDER",
    "ProviderSettings",
    "Settings",
    "SettingsStore",
    "coerce_value",
    "default_config_path",
]
