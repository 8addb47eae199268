"""
Exporter configuration
"""

from .settings import ConfigManager, ExporterConfig, parse_listen_address

__all__ = [
    'ConfigManager',
    'ExporterConfig',
    'parse_listen_address'
]
