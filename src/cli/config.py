"""Configuration loading and management."""

from pathlib import Path
from typing import Optional

import yaml

from .config_models import PacefulConfig


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".paceful" / "config.yaml",
        Path.home() / "paceful" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> PacefulConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: Invalid YAML or a config that fails validation.
    """
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return PacefulConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration as a plain dict."""
    return load_config_model(config_path).to_dict()


def write_default_config(path: Path) -> Path:
    """Write the default config to path, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = PacefulConfig().model_dump(mode="json")
    with open(path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    return path
