"""Settings module selection by ``APP_ENV``."""
import os

DEFAULT_ENV = "development"

_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", DEFAULT_ENV).strip().lower()
    return _MODULES.get(env, _MODULES[DEFAULT_ENV])
