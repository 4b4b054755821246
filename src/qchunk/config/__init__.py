"""Configuration: package defaults merged with YAML files and environment."""

from qchunk.config.defaults import get_defaults
from qchunk.config.hierarchy import load_config_hierarchy

__all__ = ["get_defaults", "load_config_hierarchy"]
