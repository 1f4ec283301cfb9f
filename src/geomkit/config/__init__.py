"""Configuration schemas and YAML loading."""

from .schemas import TransformConfig, Transform3dConfig, GeometrySettings
from .loader import ConfigLoader

__all__ = [
    "TransformConfig",
    "Transform3dConfig",
    "GeometrySettings",
    "ConfigLoader",
]
