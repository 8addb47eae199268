"""
Prometheus collectors for MinIO
"""

from .base_collector import BaseCollector, ScrapeResult
from .minio_collector import MinioCollector
from .registration import build_registry, register_build_info, version_string

__all__ = [
    'BaseCollector',
    'ScrapeResult',
    'MinioCollector',
    'build_registry',
    'register_build_info',
    'version_string'
]
