#!/usr/bin/env python3
"""
Run the MinIO exporter from a source checkout.

Usage:
    python run_exporter.py --minio.server http://localhost:9000 --minio.bucket-stats
"""

import sys

from minio_exporter.main import main

if __name__ == '__main__':
    sys.exit(main())
