import importlib
import os
from types import ModuleType
from typing import Optional


def get_settings_module() -> str:
    # Settings module is picked from APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def load_settings(settings_module: Optional[str] = None) -> ModuleType:
    return importlib.import_module(settings_module or get_settings_module())
