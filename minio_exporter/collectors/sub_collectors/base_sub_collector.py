# minio_exporter/collectors/sub_collectors/base_sub_collector.py
"""
Base class for all sub-collectors.
Sub-collectors gather one category of metrics from one upstream source.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from prometheus_client.core import Metric

from ...exceptions import UpstreamError


class SubCollector(ABC):
    """
    Abstract base class for all sub-collectors.

    Sub-collectors are lightweight components that produce one metric group.
    Unlike the main collector, they:
    - Don't build upstream clients (receive ready connectors)
    - Return metric families (not meta-metrics or scrape status)
    - Are fault-isolated: upstream failures drop metrics, never the scrape
    - Are orchestrated by MinioCollector
    """

    def __init__(self, admin, data):
        """
        Initialize sub-collector

        Args:
            admin: MinioAdminConnector instance
            data: MinioDataConnector instance
        """
        self.admin = admin
        self.data = data
        self.logger = logging.getLogger(f"subcollector.{self.__class__.__name__}")

    @abstractmethod
    def collect(self) -> List[Metric]:
        """
        Collect one metric group for the current scrape.

        Returns:
            List of metric families; empty when the upstream is unavailable.
        """
        pass

    @abstractmethod
    def get_section_name(self) -> str:
        """
        Get the name of the metric group this sub-collector produces.

        Returns:
            String name used in log messages
        """
        pass

    def resolve_location(self, bucket_name: str) -> str:
        """Bucket location, or an empty label value when the lookup fails"""
        try:
            return self.data.get_bucket_location(bucket_name)
        except UpstreamError as e:
            self.logger.debug(f"Location lookup failed for bucket {bucket_name}: {e}")
            return ''

    def log_start(self):
        """Log the start of collection"""
        self.logger.debug(f"Starting {self.get_section_name()} collection")

    def log_end(self, item_count: int = None):
        """Log the end of collection"""
        if item_count is not None:
            self.logger.debug(f"Completed {self.get_section_name()} collection: {item_count} metrics")
        else:
            self.logger.debug(f"Completed {self.get_section_name()} collection")

    def log_error(self, error: Exception):
        """Log collection error"""
        self.logger.error(f"Failed to collect {self.get_section_name()}: {error}")
