# minio_exporter/collectors/sub_collectors/__init__.py
"""
Sub-collectors for the MinIO collector.
Each sub-collector is responsible for one metric group from one upstream source.
"""

from .base_sub_collector import SubCollector
from .server_status_sub_collector import ServerStatusSubCollector
from .bucket_stats_sub_collector import BucketStatsSubCollector
from .incomplete_uploads_sub_collector import IncompleteUploadsSubCollector

__all__ = [
    'SubCollector',
    'ServerStatusSubCollector',
    'BucketStatsSubCollector',
    'IncompleteUploadsSubCollector'
]
