"""
Connectors for the upstream MinIO APIs
"""

from .minio_connector import (
    BucketUsage,
    DiskInfo,
    MinioAdminConnector,
    MinioDataConnector,
    ServerInfo,
    create_clients,
    normalize_uri
)

__all__ = [
    'BucketUsage',
    'DiskInfo',
    'MinioAdminConnector',
    'MinioDataConnector',
    'ServerInfo',
    'create_clients',
    'normalize_uri'
]
