# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating SMS-Bayes configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/sms-bayes/  (default: ~/.config/sms-bayes/)
#   - Data:    $XDG_DATA_HOME/sms-bayes/    (default: ~/.local/share/sms-bayes/)
#
# Files:
#   - config.toml:   User configuration (dataset, split, model settings)
#   - model.json:    Trained model counts (in data directory)
#   - sms-bayes.db:  SQLite database of training runs and predictions
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)

from sms_bayes.spam.classifier import EMPTY_POLICIES, EMPTY_POLICY_UNKNOWN


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "sms-bayes"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for SMS-Bayes.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/sms-bayes/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for SMS-Bayes.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/sms-bayes/
    This is where the trained model and the run database live.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        base = Path(xdg_data)
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


def ensure_directories() -> dict[str, Path]:
    """
    Creates the config and data directories if they don't exist.

    Returns:
        Dictionary mapping directory type to path.
    """
    dirs = {
        "config": get_xdg_config_home(),
        "data": get_xdg_data_home(),
    }

    for dir_path in dirs.values():
        dir_path.mkdir(parents=True, exist_ok=True)

    return dirs


# =============================================================================
# Configuration Data Structures
# =============================================================================

# SMS Spam Collection CSV: label in v1, text in v2, stray commas spill the
# rest of the message into unnamed columns
DEFAULT_TEXT_COLUMNS = ["v2", "Unnamed: 2", "Unnamed: 3", "Unnamed: 4"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ModelConfig:
    """
    Configuration for training and classification.

    Attributes:
        smoothing: Additive (Laplace) smoothing constant, must be > 0.
        empty_policy: What a message with no known tokens classifies as.
                      - "unknown": always "unknown"
                      - "prior": whichever class has the larger prior
        workers: Threads for counting and batch classification (0 = inline).
    """
    smoothing: float = 1.0
    empty_policy: str = EMPTY_POLICY_UNKNOWN
    workers: int = 0


@dataclass
class DatasetConfig:
    """
    Configuration for the labeled dataset.

    Attributes:
        path: CSV file with labeled messages ("" = must be given on the CLI).
        label_column: Column holding "ham" / "spam".
        text_columns: Columns concatenated into the message text. Columns
                      missing from the file are ignored.
        encoding: Text encoding. Undecodable bytes are replaced, not fatal.
    """
    path: str = ""
    label_column: str = "v1"
    text_columns: list[str] = field(default_factory=lambda: list(DEFAULT_TEXT_COLUMNS))
    encoding: str = "utf-8"


@dataclass
class SplitConfig:
    """
    Configuration for the stratified train/test split.

    Attributes:
        test_size: Fraction of messages held out for evaluation (0-1).
        random_state: Seed, so the same split is produced every run.
    """
    test_size: float = 0.2
    random_state: int = 42


@dataclass
class LoggingConfig:
    """
    Configuration for logging.

    Attributes:
        level: Root log level name (DEBUG, INFO, WARNING, ...).
    """
    level: str = "INFO"


@dataclass
class Config:
    """
    Main configuration container for SMS-Bayes.

    Attributes:
        model: Training and classification settings.
        dataset: Dataset location and layout.
        split: Train/test split settings.
        logging: Log settings.

    Usage:
        >>> config = Config.load()
        >>> config.model.smoothing
        1.0
    """
    model: ModelConfig = field(default_factory=ModelConfig)
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    split: SplitConfig = field(default_factory=SplitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def database_path() -> Path:
        """Returns the path to the SQLite database."""
        return get_xdg_data_home() / "sms-bayes.db"

    @staticmethod
    def model_path() -> Path:
        """Returns the path to the trained model."""
        return get_xdg_data_home() / "model.json"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from a config file.

        If the file doesn't exist, returns default configuration.

        Args:
            path: Config file. Uses the XDG location if None.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            # No config file yet - return defaults
            return cls()

        # Load and parse the TOML file
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e

        try:
            config = cls._from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e

        config.validate()
        return config

    def save(self, path: Path | None = None) -> Path:
        """
        Save configuration to a config file.

        Creates the parent directory if it doesn't exist.

        Returns:
            The path written.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

        return config_path

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ConfigError: On the first invalid value.
        """
        if self.model.smoothing <= 0:
            raise ConfigError(f"model.smoothing must be positive, got {self.model.smoothing}")
        if self.model.empty_policy not in EMPTY_POLICIES:
            raise ConfigError(
                f"model.empty_policy must be one of {EMPTY_POLICIES}, "
                f"got {self.model.empty_policy!r}"
            )
        if self.model.workers < 0:
            raise ConfigError(f"model.workers can't be negative, got {self.model.workers}")
        if not self.dataset.text_columns:
            raise ConfigError("dataset.text_columns needs at least one column")
        if not 0 < self.split.test_size < 1:
            raise ConfigError(f"split.test_size must be between 0 and 1, got {self.split.test_size}")
        if self.logging.level.upper() not in LOG_LEVELS:
            raise ConfigError(f"logging.level must be one of {LOG_LEVELS}, got {self.logging.level!r}")

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """
        Create a Config object from a dictionary (parsed TOML).
        """
        config = cls()

        # Model settings
        model = _section(data, "model")
        config.model = ModelConfig(
            smoothing=float(model.get("smoothing", 1.0)),
            empty_policy=_string(model, "model", "empty_policy", EMPTY_POLICY_UNKNOWN),
            workers=int(model.get("workers", 0)),
        )

        # Dataset settings
        dataset = _section(data, "dataset")
        text_columns = dataset.get("text_columns", DEFAULT_TEXT_COLUMNS)
        if not isinstance(text_columns, list) or not all(
            isinstance(column, str) for column in text_columns
        ):
            raise ConfigError("dataset.text_columns must be a list of column names")
        config.dataset = DatasetConfig(
            path=_string(dataset, "dataset", "path", ""),
            label_column=_string(dataset, "dataset", "label_column", "v1"),
            text_columns=list(text_columns),
            encoding=_string(dataset, "dataset", "encoding", "utf-8"),
        )

        # Split settings
        split = _section(data, "split")
        config.split = SplitConfig(
            test_size=float(split.get("test_size", 0.2)),
            random_state=int(split.get("random_state", 42)),
        )

        # Logging settings
        log = _section(data, "logging")
        config.logging = LoggingConfig(
            level=_string(log, "logging", "level", "INFO"),
        )

        return config

    def _to_dict(self) -> dict[str, Any]:
        """
        Convert Config to a dictionary for TOML serialization.
        """
        return {
            "model": {
                "smoothing": self.model.smoothing,
                "empty_policy": self.model.empty_policy,
                "workers": self.model.workers,
            },
            "dataset": {
                "path": self.dataset.path,
                "label_column": self.dataset.label_column,
                "text_columns": list(self.dataset.text_columns),
                "encoding": self.dataset.encoding,
            },
            "split": {
                "test_size": self.split.test_size,
                "random_state": self.split.random_state,
            },
            "logging": {
                "level": self.logging.level,
            },
        }


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Get a TOML table, rejecting a plain value in its place."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


def _string(section: dict[str, Any], name: str, key: str, default: str) -> str:
    """Get a string setting from a TOML table."""
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{name}.{key} must be a string, got {value!r}")
    return value


def print_paths() -> None:
    """
    Print all XDG paths for debugging.
    Useful for users wondering where their config/data is stored.
    """
    print(f"Config:  {get_xdg_config_home()}")
    print(f"Data:    {get_xdg_data_home()}")
    print()
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Model:        {Config.model_path()}")
    print(f"Database:     {Config.database_path()}")
