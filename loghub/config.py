"""
Configuration module for LogHub Query
"""

# Application configuration
import os

def env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable"""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")

def env_list(key: str, default: str = "") -> list:
    """Get a comma-separated list from environment variable, blanks dropped"""
    return [item.strip() for item in os.getenv(key, default).split(",") if item.strip()]

# Version information
from pathlib import Path

def _read_version_from_repo(default: str = "dev") -> str:
    try:
        # repo root: loghub/.. (two parents up)
        version_file = Path(__file__).resolve().parents[1] / "VERSION"
        v = version_file.read_text(encoding="utf-8").strip()
        if v:
            return v
    except OSError:
        pass
    return os.getenv("APP_VERSION", default)

API_VERSION = _read_version_from_repo()

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./loghub.db")

# API configuration
API_PREFIX = "/v1"

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")
LOG_EXCLUDE_PATHS = set(env_list("LOG_EXCLUDE_PATHS", "/v1/health,/v1/healthz"))

# Central (platform-operated) Elasticsearch
CENTRAL_ES_URLS = env_list("CENTRAL_ES_URLS", "http://elasticsearch:9200")
CENTRAL_ES_USERNAME = os.getenv("CENTRAL_ES_USERNAME", "")
CENTRAL_ES_PASSWORD = os.getenv("CENTRAL_ES_PASSWORD", "")

# Back-reader Elasticsearch, only queried when QUERY_BACK_ES is on
BACK_ES_URLS = env_list("BACK_ES_URLS", "")
BACK_ES_USERNAME = os.getenv("BACK_ES_USERNAME", "")
BACK_ES_PASSWORD = os.getenv("BACK_ES_PASSWORD", "")

ES_TIMEOUT_SEC = float(os.getenv("ES_TIMEOUT_SEC", "30"))
MAX_QUERY_SIZE = int(os.getenv("MAX_QUERY_SIZE", "1000"))

# Cluster manager (org -> clusters) and the proxy used to reach in-cluster ES
CLUSTER_MANAGER_URL = os.getenv("CLUSTER_MANAGER_URL", "http://cluster-manager:9094")
CLUSTER_DIALER_URL = os.getenv("CLUSTER_DIALER_URL", "http://cluster-dialer:80")

# Runtime configuration manager for feature flags
class RuntimeConfig:
    """Runtime configuration manager for feature flags"""

    def __init__(self):
        self._flags = {}
        self._load_from_env()

    def _load_from_env(self):
        """Load flags from environment variables"""
        self._flags = {
            "QUERY_BACK_ES": env_bool("QUERY_BACK_ES", False),
        }

    def get(self, key: str, default=None):
        """Get a flag value"""
        return self._flags.get(key, default)

    def set(self, key: str, value: bool):
        """Set a flag value"""
        if key in self._flags:
            self._flags[key] = bool(value)

    def update(self, updates: dict):
        """Update multiple flags"""
        for key, value in updates.items():
            if key in self._flags:
                self._flags[key] = bool(value)

    def get_all(self) -> dict:
        """Get all flags"""
        return self._flags.copy()

# Global runtime config instance
runtime_config = RuntimeConfig()

def get_query_back_es() -> bool:
    """Whether central queries are also dispatched to the back-reader ES"""
    return runtime_config.get("QUERY_BACK_ES", False)
