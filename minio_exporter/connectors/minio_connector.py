# minio_exporter/connectors/minio_connector.py
"""
MinIO connectors for the admin and data-plane APIs.
Thin pass-through wrappers around the minio SDK clients that normalise
responses into small dataclasses and wrap every failure in UpstreamError.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

import certifi
import urllib3
from minio import Minio, MinioAdmin
from minio.credentials import StaticProvider

from ..exceptions import ConfigurationError, UpstreamError

# Reported for online servers whose info payload carries no uptime
PLACEHOLDER_UPTIME_SECONDS = 24 * 60 * 60

ONLINE_SERVER_STATE = "online"
ONLINE_DISK_STATES = ("ok", "online")


@dataclass
class ServerInfo:
    """One server entry from the admin info endpoint"""
    endpoint: str
    state: str
    uptime: Optional[int] = None

    @classmethod
    def from_dict(cls, raw: Dict) -> 'ServerInfo':
        uptime = raw.get('uptime')
        return cls(
            endpoint=raw.get('endpoint', ''),
            state=raw.get('state', ''),
            uptime=int(uptime) if uptime else None
        )

    @property
    def is_online(self) -> bool:
        return self.state == ONLINE_SERVER_STATE

    @property
    def uptime_seconds(self) -> float:
        if self.uptime:
            return float(self.uptime)
        return float(PLACEHOLDER_UPTIME_SECONDS)


@dataclass
class DiskInfo:
    """One drive as reported by a server's info payload"""
    endpoint: str
    state: str
    total_space: int = 0
    used_space: int = 0

    @classmethod
    def from_dict(cls, raw: Dict) -> 'DiskInfo':
        return cls(
            endpoint=raw.get('endpoint', ''),
            state=raw.get('state', ''),
            total_space=int(raw.get('totalspace', 0) or 0),
            used_space=int(raw.get('usedspace', 0) or 0)
        )

    @property
    def is_online(self) -> bool:
        return self.state in ONLINE_DISK_STATES


@dataclass
class BucketUsage:
    """Per-bucket entry of the data usage snapshot"""
    bucket: str
    objects_count: int = 0
    size: int = 0

    @classmethod
    def from_dict(cls, bucket: str, raw: Dict) -> 'BucketUsage':
        return cls(
            bucket=bucket,
            objects_count=int(raw.get('objectsCount', 0) or 0),
            size=int(raw.get('size', 0) or 0)
        )


def normalize_uri(uri: str) -> Tuple[str, bool]:
    """
    Validate a MinIO server URI.

    A URI without a scheme is treated as plain HTTP.

    Args:
        uri: Server URI, e.g. "http://localhost:9000" or "myhost:9000"

    Returns:
        Tuple of (host, secure) where host is "hostname[:port]"

    Raises:
        ConfigurationError: If the scheme is not http/https or the host is empty
    """
    new_uri = uri if '://' in uri else f"http://{uri}"

    try:
        parsed = urlparse(new_uri)
        # Touch the port so malformed values are rejected here
        parsed.port
    except ValueError as e:
        raise ConfigurationError(f"Invalid MinIO URI: {new_uri} with error <{e}>") from e

    if parsed.scheme not in ('http', 'https'):
        raise ConfigurationError(f"Invalid scheme for MinIO: {parsed.scheme}")
    if not parsed.netloc:
        raise ConfigurationError(f"Empty host is not a valid host: {new_uri}")

    return parsed.netloc, parsed.scheme == 'https'


def _build_http_client() -> urllib3.PoolManager:
    """HTTP pool shared by both SDK clients; every upstream call is attempted once"""
    ca_certs = os.environ.get("SSL_CERT_FILE") or certifi.where()
    return urllib3.PoolManager(
        timeout=urllib3.Timeout(connect=30, read=120),
        maxsize=10,
        cert_reqs="CERT_REQUIRED",
        ca_certs=ca_certs,
        retries=urllib3.Retry(total=0, redirect=0, raise_on_status=False)
    )


class MinioAdminConnector:
    """
    Read-only access to the MinIO admin API.
    Each method is exactly one upstream call and raises UpstreamError on failure.
    """

    def __init__(self, client, host: str):
        self.client = client
        self.host = host
        self.logger = logging.getLogger(f'minio_connector.{host}')

    def _call(self, operation: str, func):
        try:
            payload = func()
            return json.loads(payload) if payload else {}
        except Exception as e:
            self.logger.debug(f"{operation} against {self.host} failed: {e}")
            raise UpstreamError(operation, e) from e

    def server_info(self) -> List[ServerInfo]:
        """Get per-server status from the admin info endpoint"""
        data = self._call('server_info', self.client.info)
        return [ServerInfo.from_dict(server) for server in data.get('servers') or []]

    def storage_info(self) -> List[DiskInfo]:
        """
        Get every drive in the deployment.

        The SDK has no storageinfo binding; the info endpoint carries the
        same per-drive state and capacity, so this re-reads it and flattens
        the drives of all servers.
        """
        data = self._call('storage_info', self.client.info)
        disks = []
        for server in data.get('servers') or []:
            for drive in server.get('drives') or []:
                disks.append(DiskInfo.from_dict(drive))
        return disks

    def data_usage_info(self) -> Dict[str, BucketUsage]:
        """Get the bulk data usage snapshot keyed by bucket name"""
        data = self._call('data_usage_info', self.client.get_data_usage_info)
        buckets_usage = data.get('bucketsUsageInfo') or {}
        return {
            bucket: BucketUsage.from_dict(bucket, usage or {})
            for bucket, usage in buckets_usage.items()
        }


class MinioDataConnector:
    """
    Read-only access to the S3 data-plane API.
    Each method raises UpstreamError on failure.
    """

    def __init__(self, client, host: str):
        self.client = client
        self.host = host
        self.logger = logging.getLogger(f'minio_connector.{host}')

    def list_buckets(self) -> List[str]:
        """List all bucket names"""
        try:
            return [bucket.name for bucket in self.client.list_buckets()]
        except Exception as e:
            raise UpstreamError('list_buckets', e) from e

    def get_bucket_location(self, bucket_name: str) -> str:
        """Resolve the region a bucket lives in"""
        try:
            # The SDK only exposes GetBucketLocation through its region lookup
            return self.client._get_region(bucket_name) or ''
        except Exception as e:
            raise UpstreamError('get_bucket_location', e) from e

    def count_incomplete_uploads(self, bucket_name: str, limit: int = 100) -> int:
        """
        Count incomplete multipart uploads in a bucket, stopping at limit.

        Only counts uploads, sizes are never requested.
        """
        count = 0
        key_marker = None
        upload_id_marker = None

        try:
            while count < limit:
                result = self.client._list_multipart_uploads(
                    bucket_name,
                    key_marker=key_marker,
                    max_uploads=limit - count,
                    upload_id_marker=upload_id_marker
                )
                count += len(result.uploads)
                if not result.is_truncated or not result.uploads:
                    break
                key_marker = result.next_key_marker
                upload_id_marker = result.next_upload_id_marker
        except Exception as e:
            raise UpstreamError('count_incomplete_uploads', e) from e

        return min(count, limit)


def create_clients(uri: str, access_key: str, access_secret: str,
                   region: str = "") -> Tuple[MinioAdminConnector, MinioDataConnector]:
    """
    Build the admin and data-plane connectors for one MinIO deployment.

    No network call is made here.

    Raises:
        ConfigurationError: If the URI is invalid or a client cannot be built
    """
    host, secure = normalize_uri(uri)
    http_client = _build_http_client()

    try:
        admin_client = MinioAdmin(
            endpoint=host,
            credentials=StaticProvider(access_key, access_secret),
            region=region,
            secure=secure,
            http_client=http_client
        )
    except Exception as e:
        raise ConfigurationError(f"MinIO admin client error {e}") from e

    try:
        data_client = Minio(
            endpoint=host,
            access_key=access_key,
            secret_key=access_secret,
            region=region or None,
            secure=secure,
            http_client=http_client
        )
    except Exception as e:
        raise ConfigurationError(f"MinIO client error {e}") from e

    return MinioAdminConnector(admin_client, host), MinioDataConnector(data_client, host)
