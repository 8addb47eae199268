# minio_exporter/exceptions.py
"""
Exception types shared across the exporter.
"""


class ExporterError(Exception):
    """Base class for all exporter errors"""


class ConfigurationError(ExporterError):
    """Raised when startup configuration is invalid. Always fatal."""


class UpstreamError(ExporterError):
    """
    Raised when a call to the MinIO admin or data-plane API fails.

    Sub-collectors catch this and drop the affected metric group; it never
    reaches the HTTP layer.
    """

    def __init__(self, operation: str, cause: Exception = None):
        self.operation = operation
        self.cause = cause
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
