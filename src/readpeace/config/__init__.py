"""Configuration models for readpeace."""

from .config import Config, MonitoringConfig, ReadabilityConfig, find_config_file

__all__ = ["Config", "MonitoringConfig", "ReadabilityConfig", "find_config_file"]
