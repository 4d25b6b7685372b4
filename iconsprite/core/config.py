"""Settings for transforms and sprite assembly.

Settings are read from a YAML file (``iconsprite.yaml`` by default)
under a top-level ``sprite:`` key:

    sprite:
      strict: false
      max_concurrent: 4
      extra_icon_sources:
        - "^my-custom-icons$"
      module_package: icon_packs
"""

import logging
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Tuple

import yaml

from .constants import DEFAULT_ICON_SOURCES, DEFAULT_MAX_CONCURRENT

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ICONSPRITE_CONFIG"
DEFAULT_CONFIG_FILE = "iconsprite.yaml"


@dataclass
class SpriteSettings:
    """Effective configuration for one build."""

    strict: bool = False
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    icon_sources: Optional[List[str]] = None  # replaces the defaults when set
    extra_icon_sources: List[str] = field(default_factory=list)
    module_package: Optional[str] = None  # prefix for importlib resolution

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpriteSettings":
        """Build settings from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown sprite settings: {sorted(unknown)}")
        settings = cls(**{k: v for k, v in data.items() if k in known})
        if settings.max_concurrent < 1:
            raise ValueError(f"max_concurrent must be at least 1, got {settings.max_concurrent}")
        return settings

    def compiled_sources(self) -> Tuple[Pattern, ...]:
        """Compile the effective list of recognized library patterns."""
        if self.icon_sources is None and not self.extra_icon_sources:
            return DEFAULT_ICON_SOURCES

        if self.icon_sources is None:
            base = list(DEFAULT_ICON_SOURCES)
        else:
            base = [self._compile(p) for p in self.icon_sources]
        return tuple(base + [self._compile(p) for p in self.extra_icon_sources])

    @staticmethod
    def _compile(pattern: str) -> Pattern:
        try:
            return re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid icon source pattern {pattern!r}: {e}") from e


def get_config_path(path: Optional[str] = None) -> Optional[Path]:
    """Locate the settings file: explicit path, env var, then working dir."""
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    candidate = Path.cwd() / DEFAULT_CONFIG_FILE
    return candidate if candidate.exists() else None


def load_settings(path: Optional[str] = None) -> SpriteSettings:
    """Load settings from YAML, falling back to defaults.

    Args:
        path: Explicit settings file. A missing explicit file is logged.

    Returns:
        SpriteSettings instance
    """
    config_path = get_config_path(path)
    if config_path is None:
        return SpriteSettings()

    if not config_path.exists():
        logger.warning(f"Sprite settings not found at {config_path}, using defaults")
        return SpriteSettings()

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    section = config.get("sprite", {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'sprite' section in {config_path} must be a mapping")

    logger.debug(f"Loaded sprite settings from {config_path}")
    return SpriteSettings.from_dict(section)
