"""
Kontent Graph — YAML Configuration Loader

Loads:
- delivery.yaml
- settings.yaml
- db.yaml

Secrets and per-environment values can be supplied through
environment variables (or a .env file) and override the YAML values.

Usage:
    from config.system_loader import get_delivery_config
"""

import os
import yaml
from dotenv import load_dotenv

load_dotenv()

# -------------------------------------------------
# Base Config Path
# -------------------------------------------------

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

_DELIVERY_ENV_OVERRIDES = {
    "project_id": "KONTENT_PROJECT_ID",
    "preview_api_key": "KONTENT_PREVIEW_API_KEY",
    "secure_api_key": "KONTENT_SECURE_API_KEY",
    "language": "KONTENT_LANGUAGE",
}

_DATABASE_ENV_OVERRIDES = {
    "uri": "NEO4J_URI",
    "username": "NEO4J_USERNAME",
    "password": "NEO4J_PASSWORD",
    "database": "NEO4J_DATABASE",
}


def _load_yaml(filename: str):
    path = os.path.join(BASE_DIR, filename)

    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _apply_env_overrides(section: dict, overrides: dict) -> dict:
    for key, env_key in overrides.items():
        value = os.getenv(env_key)
        if value:
            section[key] = value
    return section


# -------------------------------------------------
# Public Config Getters
# -------------------------------------------------

def get_delivery_config():
    config = _load_yaml("delivery.yaml")
    config["delivery"] = _apply_env_overrides(
        config.get("delivery") or {},
        _DELIVERY_ENV_OVERRIDES
    )
    return config


def get_database_config():
    config = _load_yaml("db.yaml")
    graph_db = config.setdefault("graph_db", {})
    graph_db["connection"] = _apply_env_overrides(
        graph_db.get("connection") or {},
        _DATABASE_ENV_OVERRIDES
    )
    return config


def get_system_config():
    return _load_yaml("settings.yaml")
