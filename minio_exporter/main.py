#!/usr/bin/env python3
"""
MinIO Exporter entry point
"""

import sys
import argparse

from . import __version__
from .collectors import MinioCollector, build_registry, version_string
from .config.settings import CONFIG_FILE_ENV, ConfigManager
from .exceptions import ConfigurationError
from .server import serve
from .utils.logging_config import setup_logging, get_logger


COUNTER_NAMES_NOTE = """
Uptime counters are exposed with a _total suffix:
  minio_uptime        -> minio_uptime_total
  minio_server_uptime -> minio_server_uptime_total
Update dashboards and alerts that query the unsuffixed names.
"""


def build_parser() -> argparse.ArgumentParser:
    """Command-line flags; unset flags fall through to env, config file and defaults"""
    parser = argparse.ArgumentParser(
        prog='minio_exporter',
        description='Prometheus exporter for MinIO server and bucket statistics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=COUNTER_NAMES_NOTE
    )

    parser.add_argument('--version', action='store_true',
                        help='Print version information.')
    parser.add_argument('--config.file', dest='config_file',
                        help=f'YAML configuration file (env {CONFIG_FILE_ENV}).')
    parser.add_argument('--web.listen-address', dest='listen_address',
                        help='Address to listen on for web interface and telemetry (default ":9290", env LISTEN_ADDRESS).')
    parser.add_argument('--web.telemetry-path', dest='metrics_path',
                        help='Path under which to expose metrics (default "/metrics", env METRIC_PATH).')
    parser.add_argument('--minio.server', dest='minio_url',
                        help='HTTP address of the MinIO server (default "http://localhost:9000", env MINIO_URL).')
    parser.add_argument('--minio.access-key', dest='access_key',
                        help='The access key used to login in to MinIO (env MINIO_ACCESS_KEY).')
    parser.add_argument('--minio.access-secret', dest='access_secret',
                        help='The access secret used to login in to MinIO (env MINIO_ACCESS_SECRET).')
    parser.add_argument('--minio.region', dest='region',
                        help='Region of the MinIO deployment (env MINIO_REGION).')
    parser.add_argument('--minio.bucket-stats', dest='bucket_stats', action=argparse.BooleanOptionalAction,
                        default=None, help='Collect bucket statistics. It can take long.')
    parser.add_argument('--minio.bucket-uploads', dest='bucket_uploads', action=argparse.BooleanOptionalAction,
                        default=None, help='Also count incomplete uploads per bucket (requires bucket stats).')
    parser.add_argument('--log.level', dest='log_level',
                        help='Log level: DEBUG, INFO, WARNING, ERROR (default "INFO", env LOG_LEVEL).')
    parser.add_argument('--log.file', dest='log_file',
                        help='Also write logs to this rotating file (env LOG_FILE).')

    return parser


def main(argv=None) -> int:
    """Run the exporter; returns the process exit code"""
    args = build_parser().parse_args(argv)

    if args.version:
        print(version_string())
        return 0

    overrides = vars(args)
    overrides.pop('version')
    config_file = overrides.pop('config_file')

    try:
        config = ConfigManager(config_file, overrides=overrides).config
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_file)
    logger = get_logger('exporter_main')

    try:
        collector = MinioCollector.from_config(config)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    if config.bucket_uploads and not config.bucket_stats:
        logger.warning("Incomplete upload counting requires bucket stats; it stays disabled")

    logger.info(f"Starting minio_exporter {__version__}")
    logger.info(f"Build context {version_string()}")

    registry = build_registry(collector)

    try:
        serve(config, registry)
    except OSError as e:
        logger.error(f"Failed to listen on {config.listen_address}: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
