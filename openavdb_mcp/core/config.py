import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# (config key path, environment variable, cast)
ENV_OVERRIDES = [
    (("api_base_url",), "OPENAVDB_API_URL", str),
    (("firebase", "api_key"), "FIREBASE_API_KEY", str),
    (("firebase", "auth_domain"), "FIREBASE_AUTH_DOMAIN", str),
    (("firebase", "project_id"), "FIREBASE_PROJECT_ID", str),
    (("token_path",), "OPENAVDB_TOKEN_PATH", str),
    (("request_timeout_ms",), "OPENAVDB_REQUEST_TIMEOUT", int),
    (("log_level",), "OPENAVDB_LOG_LEVEL", str),
    (("log_dir",), "OPENAVDB_LOG_DIR", str),
]


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _load_config(cls):
        """
        Load the YAML defaults, then apply environment overrides on top.

        The YAML path defaults to the config.yaml shipped next to the package
        and can be pointed elsewhere with OPENAVDB_CONFIG.
        """
        load_dotenv()
        config_path = os.getenv("OPENAVDB_CONFIG") or os.path.join(os.path.dirname(__file__), "..", "config.yaml")
        config_path = os.path.abspath(config_path)
        with open(config_path, "r") as f:
            cls._config = yaml.safe_load(f) or {}

        for keys, env_var, cast in ENV_OVERRIDES:
            raw = os.getenv(env_var)
            if raw is None or raw == "":
                continue
            try:
                value = cast(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_var}: {raw!r}") from e
            section = cls._config
            for key in keys[:-1]:
                section = section.setdefault(key, {})
            section[keys[-1]] = value

        for key in ("token_path", "log_dir"):
            if cls._config.get(key):
                cls._config[key] = str(Path(cls._config[key]).expanduser())

    @classmethod
    def reset(cls):
        """
        Forget the loaded configuration so the next access re-reads file and environment.
        """
        cls._instance = None
        cls._config = None

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()
