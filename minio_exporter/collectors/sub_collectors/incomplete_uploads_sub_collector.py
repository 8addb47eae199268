# minio_exporter/collectors/sub_collectors/incomplete_uploads_sub_collector.py
"""
Incomplete Uploads Sub-Collector
Counts incomplete multipart uploads per bucket.
"""

from typing import List

from prometheus_client.core import Metric

from .base_sub_collector import SubCollector
from ...exceptions import UpstreamError
from ...utils import metrics

# Counting stops here to bound the cost of a scrape
MAX_INCOMPLETE_UPLOADS = 100


class IncompleteUploadsSubCollector(SubCollector):
    """
    Emits bucket_incomplete_uploads_number per bucket, capped at
    MAX_INCOMPLETE_UPLOADS.

    A failed count only drops that bucket's sample.
    """

    def __init__(self, admin, data, limit: int = MAX_INCOMPLETE_UPLOADS):
        super().__init__(admin, data)
        self.limit = limit

    def get_section_name(self) -> str:
        """Section name for this collector"""
        return "incomplete_uploads"

    def collect(self) -> List[Metric]:
        self.log_start()

        try:
            buckets = self.data.list_buckets()
        except UpstreamError as e:
            self.log_error(e)
            return []

        incomplete_uploads = metrics.BUCKET_INCOMPLETE_UPLOADS.family()
        for bucket_name in buckets:
            location = self.resolve_location(bucket_name)

            try:
                count = self.data.count_incomplete_uploads(bucket_name, limit=self.limit)
            except UpstreamError as e:
                self.logger.debug(f"Skipping incomplete uploads for bucket {bucket_name}: {e}")
                continue

            metrics.BUCKET_INCOMPLETE_UPLOADS.add(
                incomplete_uploads, min(count, self.limit), [bucket_name, location]
            )

        collected = metrics.populated([incomplete_uploads])
        self.log_end(len(collected))
        return collected
