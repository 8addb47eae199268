# minio_exporter/collectors/minio_collector.py
"""
MinIO Collector
Per-scrape orchestration: one primary admin call decides scrape success,
then fault-isolated sub-collectors fan out, then the meta-metrics close
every scrape.
"""

import time
from typing import Iterator, List

from prometheus_client.core import Metric

from .base_collector import BaseCollector, ScrapeResult
from .sub_collectors import (
    SubCollector,
    ServerStatusSubCollector,
    BucketStatsSubCollector,
    IncompleteUploadsSubCollector
)
from ..connectors.minio_connector import create_clients
from ..utils import metrics


class MinioCollector(BaseCollector):
    """
    Collects MinIO statistics for Prometheus.

    Built once at startup and shared across concurrent scrapes; holds only
    read-only connectors and flags.
    """

    def __init__(self, admin, data, bucket_stats: bool = False,
                 bucket_uploads: bool = False, name: str = "minio"):
        super().__init__(name)
        self.admin = admin
        self.data = data
        self.bucket_stats = bucket_stats
        self.bucket_uploads = bucket_uploads

    @classmethod
    def from_config(cls, config) -> 'MinioCollector':
        """
        Build a collector from an ExporterConfig.

        Raises:
            ConfigurationError: If the MinIO URI or clients are invalid
        """
        admin, data = create_clients(
            config.minio_url,
            config.access_key,
            config.access_secret,
            region=config.region
        )
        return cls(
            admin,
            data,
            bucket_stats=config.bucket_stats,
            bucket_uploads=config.bucket_uploads
        )

    def describe(self) -> List[Metric]:
        return [
            metrics.SCRAPE_DURATION.family(),
            metrics.SCRAPE_SUCCESS.family(),
        ]

    def collect(self) -> Iterator[Metric]:
        self.log_collection_start()
        begin = time.perf_counter()

        # Primary phase; only this call decides scrape success
        try:
            servers = self.admin.server_info()
        except Exception as e:
            result = self.handle_collection_error(e, "server info")
        else:
            result = ScrapeResult(success=True)
            online_uptimes = [server.uptime_seconds for server in servers if server.is_online]
            yield metrics.UPTIME.counter(max(online_uptimes, default=0.0))

        # Fan-out phase runs whatever the primary phase returned
        for sub_collector in self._get_sub_collectors():
            yield from self._run_sub_collector(sub_collector)

        result.duration = max(time.perf_counter() - begin, 0.0)
        self.log_collection_end(result)

        yield metrics.SCRAPE_DURATION.gauge(result.duration)
        yield metrics.SCRAPE_SUCCESS.gauge(1.0 if result.success else 0.0)

    def _get_sub_collectors(self) -> List[SubCollector]:
        """Sub-collectors enabled for this exporter"""
        sub_collectors = [ServerStatusSubCollector(self.admin, self.data)]

        if self.bucket_stats:
            sub_collectors.append(BucketStatsSubCollector(self.admin, self.data))
            if self.bucket_uploads:
                sub_collectors.append(IncompleteUploadsSubCollector(self.admin, self.data))

        return sub_collectors

    def _run_sub_collector(self, sub_collector: SubCollector) -> List[Metric]:
        """Run one sub-collector; its failure never reaches the scrape"""
        try:
            return sub_collector.collect()
        except Exception as e:
            self.logger.exception(f"{sub_collector.get_section_name()} sub-collector failed: {e}")
            return []
