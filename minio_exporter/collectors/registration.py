# minio_exporter/collectors/registration.py
"""
One-time registration of the exporter's collectors.

Builds an explicit CollectorRegistry holding:
  minio_exporter_build_info{version=...,pythonversion=...} 1
  process_* / python_info from the prometheus_client default collectors
  the MinioCollector itself
"""

import logging
import platform

from prometheus_client import CollectorRegistry, Info, PlatformCollector, ProcessCollector

from .. import __program__, __version__

logger = logging.getLogger(__name__)

__all__ = ["build_registry", "register_build_info", "version_string"]


def version_string() -> str:
    """Human readable version line printed by --version"""
    return f"{__program__}, version {__version__} (python {platform.python_version()})"


def register_build_info(registry: CollectorRegistry) -> Info:
    """Register the build info metric into registry"""
    build_info = Info(
        'build',
        'A metric with a constant \'1\' value labeled by version and pythonversion '
        f'from which {__program__} was built.',
        namespace=__program__,
        registry=registry
    )
    build_info.info({
        'version': __version__,
        'pythonversion': platform.python_version()
    })
    return build_info


def build_registry(collector, registry: CollectorRegistry = None) -> CollectorRegistry:
    """
    Register collector plus version and process metadata.

    Called once at startup; scrapes only read the returned registry.

    Args:
        collector: Object implementing describe()/collect()
        registry: Registry to populate; a fresh one is created when omitted

    Returns:
        The populated registry
    """
    if registry is None:
        registry = CollectorRegistry()

    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    register_build_info(registry)
    registry.register(collector)

    logger.info(f"Registered collector {collector.__class__.__name__} with build info {__version__}")
    return registry
