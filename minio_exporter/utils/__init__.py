"""
Utility modules for metric emission and logging
"""

from .logging_config import LoggingConfig, setup_logging, get_logger
from .metrics import MetricDescriptor, build_fqname, NAMESPACE

__all__ = [
    'LoggingConfig',
    'setup_logging',
    'get_logger',
    'MetricDescriptor',
    'build_fqname',
    'NAMESPACE'
]
