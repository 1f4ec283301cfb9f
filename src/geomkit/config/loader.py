"""
YAML loader for geometry settings and transform configs.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from .schemas import GeometrySettings, TransformConfig, Transform3dConfig
from ..geometry.transform import Transform
from ..geometry.transform3d import Transform3d

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and validate geomkit configuration from YAML files."""

    @staticmethod
    def _read(filepath: str | Path) -> Dict[str, Any]:
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f)

        # An empty file means "all defaults"
        return raw_config or {}

    @staticmethod
    def load_settings(filepath: str | Path) -> GeometrySettings:
        """
        Load GeometrySettings from a YAML file.

        Args:
            filepath: Path to YAML file with a ``settings`` section

        Returns:
            Validated settings
        """
        raw_config = ConfigLoader._read(filepath)
        settings = GeometrySettings(**(raw_config.get("settings") or {}))
        logger.info("Loaded geometry settings from %s", filepath)
        return settings

    @staticmethod
    def load_transform(filepath: str | Path,
                       settings: Optional[GeometrySettings] = None) -> Transform | Transform3d:
        """
        Load a transform from a YAML file.

        The file holds either a ``transform`` section (2D) or a
        ``transform3d`` section (3D). The result is cast to the settings'
        dtype.

        Args:
            filepath: Path to YAML file
            settings: Settings to apply; defaults to the file's ``settings``
                section

        Returns:
            Transform or Transform3d built from the validated config
        """
        raw_config = ConfigLoader._read(filepath)
        if settings is None:
            settings = GeometrySettings(**(raw_config.get("settings") or {}))

        if "transform3d" in raw_config:
            config = Transform3dConfig(**(raw_config["transform3d"] or {}))
            logger.info("Loaded 3D transform from %s", filepath)
            return settings.cast(config.to_transform3d())

        config = TransformConfig(**(raw_config.get("transform") or {}))
        logger.info("Loaded 2D transform from %s", filepath)
        return settings.cast(config.to_transform())

    @staticmethod
    def validate(filepath: str | Path) -> bool:
        """
        Validate a config file without building anything.

        Args:
            filepath: Path to YAML file

        Returns:
            True if valid, raises ValidationError otherwise
        """
        raw_config = ConfigLoader._read(filepath)

        # These will raise ValidationError if invalid
        GeometrySettings(**(raw_config.get("settings") or {}))
        if "transform" in raw_config:
            TransformConfig(**(raw_config["transform"] or {}))
        if "transform3d" in raw_config:
            Transform3dConfig(**(raw_config["transform3d"] or {}))

        return True
