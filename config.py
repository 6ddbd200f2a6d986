"""Configuration management for Trip Budget.

Reads configuration from ~/.config/tripbudget.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

DEFAULT_STORAGE_KEY = "trip-budget-buddy-v1"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    storage_key: str = DEFAULT_STORAGE_KEY

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "tripbudget"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="tripbudget.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            storage_key=DEFAULT_STORAGE_KEY,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "tripbudget.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def get_seed_dir() -> Path:
    """Get the path to the seed data directory."""
    return Path(__file__).parent / "db" / "seed"


def load_config(config_path: Path = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional override of the config file location.

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "tripbudget"))
    storage_key = data.get("storage_key", DEFAULT_STORAGE_KEY)

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "tripbudget.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        storage_key=storage_key,
    )


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination TOML file.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "storage_key": config.storage_key,
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
