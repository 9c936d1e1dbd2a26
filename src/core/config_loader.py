import json
import logging
import os
from pathlib import Path
from typing import Optional

from core.models.config_data import configData, configDatabaseData

logger = logging.getLogger(__name__)

# POSTGRES_* environment variables win over the config file
DATABASE_ENV = {
    "host": "POSTGRES_HOST",
    "user": "POSTGRES_USER",
    "password": "POSTGRES_PASSWORD",
    "port": "POSTGRES_PORT",
    "dbname": "POSTGRES_DBNAME",
    "sslmode": "POSTGRES_SSLMODE",
}


class ConfigLoader:
    """Loads and manages service configuration from JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = cls._get_default_config()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the api_rec_config.json file."""
        # Config file should be in the project root/config directory
        config_path = Path(__file__).parent.parent.parent / "config" / "api_rec_config.json"
        return config_path

    def load_config(self):
        """Load configuration from JSON file, then apply environment overrides."""
        config_path = self.get_config_path()

        # Start from defaults so a broken file still leaves a usable config
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.error(f"Configuration file not found: {config_path}")
        else:
            try:
                with open(config_path, 'r') as f:
                    json_data = json.load(f)
                    db_cfg = json_data.get("database", {})
                    self._config.database = configDatabaseData(
                        url=db_cfg.get("url"),
                        host=db_cfg.get("host", ""),
                        user=db_cfg.get("user", ""),
                        password=db_cfg.get("password", ""),
                        port=str(db_cfg.get("port", "5432")),
                        dbname=db_cfg.get("dbname", "diwise"),
                        sslmode=db_cfg.get("sslmode", "disable"),
                        pool_size=db_cfg.get("pool_size", 5),
                    )
                    self._config.rec_input_file = json_data.get("rec_input_file", self._config.rec_input_file)
                    self._config.api_path = json_data.get("api_path")
                    self._config.dedup_window_seconds = json_data.get("dedup_window_seconds", 60)
                logger.info(f"Configuration loaded from {config_path}")

            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse configuration file: {e}")
                self._config = self._get_default_config()

            except (OSError, TypeError, AttributeError) as e:
                logger.error(f"Unexpected error loading configuration: {e}")
                self._config = self._get_default_config()

        for field_name, env_name in DATABASE_ENV.items():
            env_value = os.getenv(env_name)
            if env_value:
                setattr(self._config.database, field_name, env_value)

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData(database=configDatabaseData())

    def get_database_url(self) -> str:
        """
        Build the SQLAlchemy URL. An explicit url wins, then a PostgreSQL
        host, otherwise a local SQLite file is used for development.
        """
        db = self._config.database
        if db.url:
            return db.url
        if db.host:
            return (
                f"postgresql+psycopg2://{db.user}:{db.password}@{db.host}:{db.port}/{db.dbname}"
                f"?sslmode={db.sslmode}"
            )
        sqlite_path = Path(__file__).parent.parent.parent / "storage" / "api_rec.db"
        return f"sqlite:///{sqlite_path}"

    def get_pool_size(self) -> int:
        return self._config.database.pool_size

    def get_rec_input_file(self) -> str:
        return self._config.rec_input_file

    def get_api_path(self) -> Optional[str]:
        return self._config.api_path

    def get_dedup_window_seconds(self) -> int:
        return self._config.dedup_window_seconds

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()
