# minio_exporter/collectors/sub_collectors/bucket_stats_sub_collector.py
"""
Bucket Stats Sub-Collector
Collects per-bucket object count and size from the bulk data usage snapshot,
falling back to a plain bucket listing when the snapshot is unavailable.
"""

from typing import List

from prometheus_client.core import Metric

from .base_sub_collector import SubCollector
from ...exceptions import UpstreamError
from ...utils import metrics


class BucketStatsSubCollector(SubCollector):
    """
    Two-tier bucket metrics.

    Fast path: one data usage call gives count and size for every bucket.
    Fallback: list buckets and emit only bucket_exists, never scanning
    objects.
    """

    def get_section_name(self) -> str:
        """Section name for this collector"""
        return "bucket_stats"

    def collect(self) -> List[Metric]:
        self.log_start()

        try:
            usage = self.admin.data_usage_info()
        except UpstreamError as e:
            self.logger.debug(f"Failed to get data usage info, falling back to bucket listing: {e}")
            collected = self._collect_bucket_listing()
        else:
            collected = self._collect_data_usage(usage)

        self.log_end(len(collected))
        return collected

    def _collect_data_usage(self, usage) -> List[Metric]:
        """Object count and total size per bucket"""
        objects_number = metrics.BUCKET_OBJECTS_NUMBER.family()
        objects_total_size = metrics.BUCKET_OBJECTS_TOTAL_SIZE.family()

        for bucket_name, bucket_usage in usage.items():
            labels = [bucket_name, self.resolve_location(bucket_name)]

            metrics.BUCKET_OBJECTS_NUMBER.add(objects_number, bucket_usage.objects_count, labels)
            metrics.BUCKET_OBJECTS_TOTAL_SIZE.add(objects_total_size, bucket_usage.size, labels)

        return metrics.populated([objects_number, objects_total_size])

    def _collect_bucket_listing(self) -> List[Metric]:
        """Existence flag per bucket; nothing when listing fails"""
        try:
            buckets = self.data.list_buckets()
        except UpstreamError as e:
            self.log_error(e)
            return []

        exists = metrics.BUCKET_EXISTS.family()
        for bucket_name in buckets:
            metrics.BUCKET_EXISTS.add(exists, 1, [bucket_name, self.resolve_location(bucket_name)])

        return metrics.populated([exists])
