# minio_exporter/collectors/base_collector.py
"""
Base collector class for Prometheus collectors in the exporter.
Provides scrape outcome tracking, error handling and logging.
"""

from abc import ABC, abstractmethod
from typing import Iterable
import logging

from prometheus_client.core import Metric


class ScrapeResult:
    """Outcome of one scrape: duration and success of the primary upstream call"""

    def __init__(self, success: bool, duration: float = 0.0, error: str = None):
        self.success = success
        self.duration = duration
        self.error = error


class BaseCollector(ABC):
    """
    Abstract base class for exporter collectors.

    Implements the collector protocol prometheus_client expects from
    anything passed to CollectorRegistry.register: describe() declares
    metric families, collect() produces them for one scrape.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"collector.{name}")

    @abstractmethod
    def describe(self) -> Iterable[Metric]:
        """
        Declare the metric families this collector always produces.

        Returns:
            Iterable of empty metric families
        """
        pass

    @abstractmethod
    def collect(self) -> Iterable[Metric]:
        """
        Produce metric families for one scrape. Must not raise.

        Returns:
            Iterable of metric families
        """
        pass

    def log_collection_start(self):
        """Log the start of a scrape"""
        self.logger.debug(f"Starting scrape of {self.name}")

    def log_collection_end(self, result: ScrapeResult):
        """Log the end of a scrape"""
        if result.success:
            self.logger.debug(f"OK: collector succeeded after {result.duration:f}s")
        else:
            self.logger.error(f"ERROR: collector failed after {result.duration:f}s: {result.error}")

    def handle_collection_error(self, error: Exception, context: str = "") -> ScrapeResult:
        """Handle collection errors with consistent logging"""
        context_prefix = f"[{context}] " if context else ""
        error_msg = f"{context_prefix}{error}"

        self.logger.debug(f"Collection failed: {error_msg}")

        return ScrapeResult(success=False, error=error_msg)
