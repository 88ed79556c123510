"""Configuration module.

Settings are read from the YAML file pointed to by ``POTIONS_SETTINGS_PATH``
(the packaged ``resources/sample_settings.yaml`` otherwise). A handful of
environment variables override individual keys.
"""

import os
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_SETTINGS_PATH = str(Path(__file__).parent / "resources" / "sample_settings.yaml")


def load_settings(path: str = None) -> Dict[str, Any]:
    """Load a settings YAML file into a plain dict.

    Parameters
    ----------
    path : str, optional
        Settings file path. Defaults to the packaged sample settings.

    Returns
    -------
    dict
        Parsed settings. An empty file yields an empty dict.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    path = path or DEFAULT_SETTINGS_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Settings file not found: {path}")
    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


SETTINGS_PATH = os.getenv("POTIONS_SETTINGS_PATH", DEFAULT_SETTINGS_PATH)
settings = load_settings(SETTINGS_PATH)

PROJECT_NAME = settings.get("project", {}).get("name", "potions")

######################
#   Log Settings     #
######################
_log_settings = settings.get("log", {})
LOG_FILE_PATH = _log_settings.get("log_path", "default")
if LOG_FILE_PATH == "default":
    LOG_FILE_PATH = f"{PROJECT_NAME}.log"
LOG_FILE_LEVEL = os.getenv("LOG_FILE_LEVEL", _log_settings.get("log_file_level", "disable")).upper()
LOG_STREAM_LEVEL = os.getenv("LOG_STREAM_LEVEL", _log_settings.get("log_stream_level", "info")).upper()

######################
#   DB Settings      #
######################
DB_BACKEND = os.getenv("POTIONS_DB_BACKEND", settings.get("db", {}).get("backend", "mongodb")).lower()

_mongo_settings = settings.get("mongodb", {})
MONGO_URI = os.getenv("MONGO_URI", _mongo_settings.get("uri", "mongodb://localhost:27017"))
MONGO_DB = os.getenv("MONGO_DB", _mongo_settings.get("db", "potions"))
MONGO_POTIONS_COLLECTION = _mongo_settings.get("potions_collection", "potions")
MONGO_USERS_COLLECTION = _mongo_settings.get("users_collection", "users")

######################
#   Auth Settings    #
######################
_auth_settings = settings.get("auth", {})
JWT_SECRET = os.getenv("JWT_SECRET", _auth_settings.get("jwt_secret", "dev_secret"))
JWT_ALGORITHM = _auth_settings.get("jwt_algorithm", "HS256")
TOKEN_TTL_SECONDS = int(_auth_settings.get("token_ttl_seconds", 24 * 60 * 60))
COOKIE_NAME = os.getenv("COOKIE_NAME", _auth_settings.get("cookie_name", "potions_token"))
COOKIE_SECURE = _env_bool("COOKIE_SECURE", bool(_auth_settings.get("cookie_secure", False)))

######################
#   Web Server       #
######################
_web_settings = settings.get("web_server", {})
WEBSERVER_HOST = os.getenv("WEBSERVER_HOST", _web_settings.get("host", "0.0.0.0"))
WEBSERVER_PORT = int(os.getenv("PORT", _web_settings.get("port", 3000)))
CORS_ORIGINS = _web_settings.get("cors_origins", ["*"])
