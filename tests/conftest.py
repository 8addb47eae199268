"""
Shared fixtures: fake MinIO connectors and registry helpers.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from prometheus_client import CollectorRegistry

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from minio_exporter.connectors.minio_connector import (
    BucketUsage,
    DiskInfo,
    MinioAdminConnector,
    MinioDataConnector,
    ServerInfo
)
from minio_exporter.exceptions import UpstreamError


@pytest.fixture
def servers():
    return [
        ServerInfo(endpoint='node1:9000', state='online', uptime=3600),
        ServerInfo(endpoint='node2:9000', state='offline'),
    ]


@pytest.fixture
def disks():
    return [
        DiskInfo(endpoint='/data1', state='ok', total_space=1000, used_space=400),
        DiskInfo(endpoint='/data2', state='online', total_space=1000, used_space=100),
        DiskInfo(endpoint='/data3', state='faulty', total_space=500, used_space=0),
    ]


@pytest.fixture
def admin(servers, disks):
    """Admin connector where every call succeeds"""
    connector = MagicMock(spec=MinioAdminConnector)
    connector.server_info.return_value = servers
    connector.storage_info.return_value = disks
    connector.data_usage_info.return_value = {
        'photos': BucketUsage('photos', objects_count=10, size=2048),
    }
    return connector


@pytest.fixture
def data():
    """Data-plane connector where every call succeeds"""
    connector = MagicMock(spec=MinioDataConnector)
    connector.list_buckets.return_value = ['photos', 'backups']
    connector.get_bucket_location.return_value = 'us-east-1'
    connector.count_incomplete_uploads.return_value = 3
    return connector


def upstream_failure(operation):
    return UpstreamError(operation, ConnectionError('connection refused'))


def registry_for(collector):
    """Register a collector into a fresh registry"""
    registry = CollectorRegistry()
    registry.register(collector)
    return registry


def metric_names(metric_families):
    """Sample names produced by a list of metric families"""
    return {sample.name for family in metric_families for sample in family.samples}


def sample_value(metric_families, name, labels=None):
    """Value of one sample in an already-collected list of families, or None"""
    labels = labels or {}
    for family in metric_families:
        for sample in family.samples:
            if sample.name == name and sample.labels == labels:
                return sample.value
    return None
