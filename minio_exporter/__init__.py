"""
MinIO Exporter

Translates MinIO admin and data-plane API state into Prometheus metrics
on every scrape.
"""

__version__ = "1.0.0"
__program__ = "minio_exporter"
