"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from preppy.tracking.models import QualityLevel


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".preppy"


@dataclass
class TDEEConfig:
    """TDEE estimator configuration."""

    min_days: int = 14
    max_interpolation_gap_days: int = 3
    window_weights: dict[int, float] = field(
        default_factory=lambda: {14: 0.5, 21: 0.3, 28: 0.2}
    )


@dataclass
class CoachingConfig:
    """Coaching gate configuration."""

    min_days_between_updates: int = 7
    high_quality_threshold: float = 0.03
    medium_quality_threshold: float = 0.05
    low_quality_threshold: float = 0.08

    def thresholds(self) -> dict[QualityLevel, float]:
        """Return change thresholds keyed by quality level."""
        return {
            QualityLevel.HIGH: self.high_quality_threshold,
            QualityLevel.MEDIUM: self.medium_quality_threshold,
            QualityLevel.LOW: self.low_quality_threshold,
        }


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class Settings:
    """Main application settings."""

    tdee: TDEEConfig = field(default_factory=TDEEConfig)
    coaching: CoachingConfig = field(default_factory=CoachingConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.preppy/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse TDEE config
        if "tdee" in data:
            tdee_data = data["tdee"]
            if "min_days" in tdee_data:
                settings.tdee.min_days = int(tdee_data["min_days"])
            if "max_interpolation_gap_days" in tdee_data:
                settings.tdee.max_interpolation_gap_days = int(
                    tdee_data["max_interpolation_gap_days"]
                )
            if "window_weights" in tdee_data:
                settings.tdee.window_weights = {
                    int(days): float(weight)
                    for days, weight in tdee_data["window_weights"].items()
                }

        # Parse coaching config
        if "coaching" in data:
            coach_data = data["coaching"]
            if "min_days_between_updates" in coach_data:
                settings.coaching.min_days_between_updates = int(
                    coach_data["min_days_between_updates"]
                )
            for level in ("high", "medium", "low"):
                key = f"{level}_quality_threshold"
                if key in coach_data:
                    setattr(settings.coaching, key, float(coach_data[key]))

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"]
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        return settings

    def to_dict(self) -> dict:
        """Convert to the YAML document structure."""
        return {
            "tdee": {
                "min_days": self.tdee.min_days,
                "max_interpolation_gap_days": self.tdee.max_interpolation_gap_days,
                "window_weights": dict(self.tdee.window_weights),
            },
            "coaching": {
                "min_days_between_updates": self.coaching.min_days_between_updates,
                "high_quality_threshold": self.coaching.high_quality_threshold,
                "medium_quality_threshold": self.coaching.medium_quality_threshold,
                "low_quality_threshold": self.coaching.low_quality_threshold,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.preppy/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
