# minio_exporter/collectors/sub_collectors/server_status_sub_collector.py
"""
Server Status Sub-Collector
Collects per-node up/uptime and deployment-wide disk aggregates.
"""

from typing import List

from prometheus_client.core import Metric

from .base_sub_collector import SubCollector
from ...connectors.minio_connector import DiskInfo
from ...exceptions import UpstreamError
from ...utils import metrics


class ServerStatusSubCollector(SubCollector):
    """
    Emits server up/uptime per node and storage totals.

    Server info and storage info are separate upstream calls; either can
    fail without affecting the other.
    """

    def get_section_name(self) -> str:
        """Section name for this collector"""
        return "server_status"

    def collect(self) -> List[Metric]:
        self.log_start()

        collected = []
        collected.extend(self._collect_servers())
        collected.extend(self._collect_storage())

        self.log_end(len(collected))
        return collected

    def _collect_servers(self) -> List[Metric]:
        """Up gauge for every node, uptime counter for online nodes"""
        try:
            servers = self.admin.server_info()
        except UpstreamError as e:
            self.log_error(e)
            return []

        uptime = metrics.SERVER_UPTIME.family(metrics.COUNTER)
        up = metrics.SERVER_UP.family()
        for server in servers:
            host = server.endpoint
            if server.is_online:
                metrics.SERVER_UPTIME.add(uptime, server.uptime_seconds, [host])
            metrics.SERVER_UP.add(up, 1 if server.is_online else 0, [host])

        return metrics.populated([uptime, up])

    def _collect_storage(self) -> List[Metric]:
        """Disk space and disk state totals; nothing when storage info fails"""
        try:
            disks = self.admin.storage_info()
        except UpstreamError as e:
            self.logger.warning(f"Storage info unavailable, skipping storage metrics: {e}")
            return []

        return build_storage_metrics(disks)


def build_storage_metrics(disks: List[DiskInfo]) -> List[Metric]:
    """
    Derive storage aggregates from a list of disks.

    Online and offline disk counts always sum to the number of disks.
    """
    total_disks = len(disks)
    online_disks = sum(1 for disk in disks if disk.is_online)
    total_space = sum(disk.total_space for disk in disks)
    used_space = sum(disk.used_space for disk in disks)

    return [
        metrics.STORAGE_TOTAL_DISK_SPACE.gauge(total_space),
        metrics.STORAGE_FREE_DISK_SPACE.gauge(total_space - used_space),
        metrics.STORAGE_ONLINE_DISKS.gauge(online_disks),
        metrics.STORAGE_OFFLINE_DISKS.gauge(total_disks - online_disks),
    ]
