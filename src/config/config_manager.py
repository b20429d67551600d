"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Provides bi-directional mapping between dataclasses and JSON persistence.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")

CONFIG_FILENAME = "config.json"
DEFAULT_DATA_DIR = "./config"

DEFAULT_GOAL = 50
DEFAULT_OFFICE = "McLean, VA"
DEFAULT_FLEX_CREDIT = "Flex Credit"
DEFAULT_TIME_PERIOD_FILE = "workday-fiscal-quarters.yaml"


@dataclass
class Paths:
    """File paths configuration."""
    custom_font_path: str = ""  # Custom TTF font for PDF generation


@dataclass
class Settings:
    """Attendance policy settings."""
    goal: int = DEFAULT_GOAL                     # Required office percentage
    default_office: str = DEFAULT_OFFICE         # Office recorded for new badge-ins
    flex_credit: str = DEFAULT_FLEX_CREDIT       # Office label for flex credits
    time_periods: List[str] = field(default_factory=lambda: [DEFAULT_TIME_PERIOD_FILE])

    def active_time_period_file(self, index: int = 0) -> str:
        """
        Get the period file name at a position in time_periods.

        Falls back to the first configured file, then to the default name.
        """
        if 0 <= index < len(self.time_periods):
            return self.time_periods[index]
        if self.time_periods:
            return self.time_periods[0]
        return DEFAULT_TIME_PERIOD_FILE


@dataclass
class OutputSettings:
    """Output settings for exported reports."""
    output_dir: str = ""  # Default empty = current directory
    filename_pattern: str = "RTO_{period}.xlsx"
    generate_pdf: bool = False
    pdf_filename_pattern: str = "RTO_{period}.pdf"


@dataclass
class AppConfig:
    """Main application configuration container."""
    paths: Paths = field(default_factory=Paths)
    settings: Settings = field(default_factory=Settings)
    output_settings: OutputSettings = field(default_factory=OutputSettings)


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file
    - Save configuration to JSON file
    - Provide default configuration
    - Convert between dataclass and dict representations
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else Path(DEFAULT_DATA_DIR) / CONFIG_FILENAME
        self._config: AppConfig = AppConfig()

    @classmethod
    def for_data_dir(cls, data_dir: Path) -> "ConfigManager":
        """Create a manager for the config.json inside a data directory."""
        return cls(Path(data_dir) / CONFIG_FILENAME)

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Failed to load config, using defaults. Error: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        data = self._config_to_dict(self._config)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def update(self, **kwargs) -> None:
        """Update specific configuration values."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
        self.save()

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "paths": {
                "custom_font_path": config.paths.custom_font_path
            },
            "settings": {
                "goal": config.settings.goal,
                "default_office": config.settings.default_office,
                "flex_credit": config.settings.flex_credit,
                "time_periods": list(config.settings.time_periods)
            },
            "output_settings": {
                "output_dir": config.output_settings.output_dir,
                "filename_pattern": config.output_settings.filename_pattern,
                "generate_pdf": config.output_settings.generate_pdf,
                "pdf_filename_pattern": config.output_settings.pdf_filename_pattern
            }
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        paths_data = data.get("paths", {})
        settings_data = data.get("settings", {})
        output_settings_data = data.get("output_settings", {})

        paths = Paths(
            custom_font_path=paths_data.get("custom_font_path", "")
        )

        # Empty or non-positive values fall back to defaults
        goal = int(settings_data.get("goal") or 0)
        settings = Settings(
            goal=goal if goal > 0 else DEFAULT_GOAL,
            default_office=settings_data.get("default_office") or DEFAULT_OFFICE,
            flex_credit=settings_data.get("flex_credit") or DEFAULT_FLEX_CREDIT,
            time_periods=list(settings_data.get("time_periods") or [DEFAULT_TIME_PERIOD_FILE])
        )

        output_settings = OutputSettings(
            output_dir=output_settings_data.get("output_dir", ""),
            filename_pattern=output_settings_data.get("filename_pattern", "RTO_{period}.xlsx"),
            generate_pdf=output_settings_data.get("generate_pdf", False),
            pdf_filename_pattern=output_settings_data.get("pdf_filename_pattern", "RTO_{period}.pdf")
        )

        return AppConfig(
            paths=paths,
            settings=settings,
            output_settings=output_settings
        )
