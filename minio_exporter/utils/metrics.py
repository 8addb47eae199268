# minio_exporter/utils/metrics.py
"""
Metric emission helpers.
Centralises the minio_<subsystem>_<name> naming convention and the label
sets of every metric the exporter produces.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

NAMESPACE = "minio"

GAUGE = "gauge"
COUNTER = "counter"


def build_fqname(namespace: str, subsystem: str, name: str) -> str:
    """Join the non-empty name parts with underscores"""
    return '_'.join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class MetricDescriptor:
    """Name, help text and ordered label names of one metric"""
    subsystem: str
    name: str
    documentation: str
    label_names: Tuple[str, ...] = ()
    namespace: str = NAMESPACE

    @property
    def fqname(self) -> str:
        return build_fqname(self.namespace, self.subsystem, self.name)

    def family(self, kind: str = GAUGE):
        """Empty metric family; one per scrape, filled through add()"""
        if kind == COUNTER:
            return CounterMetricFamily(self.fqname, self.documentation, labels=self.label_names)
        if kind == GAUGE:
            return GaugeMetricFamily(self.fqname, self.documentation, labels=self.label_names)
        raise ValueError(f"Unknown metric kind: {kind}")

    def add(self, metric, value: float, label_values: Sequence[str] = ()):
        """
        Add one labelled sample to a family built by this descriptor.

        Raises:
            ValueError: If the label values don't match the label names
        """
        label_values = [str(v) for v in label_values]
        if len(label_values) != len(self.label_names):
            raise ValueError(
                f"{self.fqname} expects {len(self.label_names)} label values, got {len(label_values)}"
            )
        metric.add_metric(label_values, float(value))
        return metric

    def sample(self, kind: str, value: float, label_values: Sequence[str] = ()):
        """Build a single-sample metric family"""
        return self.add(self.family(kind), value, label_values)

    def gauge(self, value: float, label_values: Sequence[str] = ()) -> GaugeMetricFamily:
        return self.sample(GAUGE, value, label_values)

    def counter(self, value: float, label_values: Sequence[str] = ()) -> CounterMetricFamily:
        return self.sample(COUNTER, value, label_values)


def populated(families: Iterable[Metric]) -> List[Metric]:
    """Drop families that ended up with no samples"""
    return [family for family in families if family.samples]


# Scrape meta-metrics
SCRAPE_DURATION = MetricDescriptor(
    'scrape', 'collector_duration_seconds',
    'minio_exporter: Duration of a collector scrape.'
)
SCRAPE_SUCCESS = MetricDescriptor(
    'scrape', 'collector_success',
    'minio_exporter: Whether the collector succeeded.'
)

UPTIME = MetricDescriptor('', 'uptime', 'MinIO service uptime in seconds')

# Server status
SERVER_LABELS = ('minio_host',)
SERVER_UP = MetricDescriptor('server', 'up', 'MinIO host up', SERVER_LABELS)
SERVER_UPTIME = MetricDescriptor('server', 'uptime', 'MinIO server uptime in seconds', SERVER_LABELS)

# Storage aggregates
STORAGE_TOTAL_DISK_SPACE = MetricDescriptor(
    'storage', 'total_disk_space', 'Total MinIO disk space in bytes'
)
STORAGE_FREE_DISK_SPACE = MetricDescriptor(
    'storage', 'free_disk_space', 'Free MinIO disk space in bytes'
)
STORAGE_ONLINE_DISKS = MetricDescriptor(
    'storage', 'online_disks', 'Total number of MinIO online disks'
)
STORAGE_OFFLINE_DISKS = MetricDescriptor(
    'storage', 'offline_disks', 'Total number of MinIO offline disks'
)

# Buckets; a bucket label always comes with a location label
BUCKET_LABELS = ('bucket', 'location')
BUCKET_OBJECTS_NUMBER = MetricDescriptor(
    'bucket', 'objects_number', 'The number of objects in the bucket', BUCKET_LABELS
)
BUCKET_OBJECTS_TOTAL_SIZE = MetricDescriptor(
    'bucket', 'objects_total_size', 'The total size of all objects in the bucket', BUCKET_LABELS
)
BUCKET_EXISTS = MetricDescriptor(
    'bucket', 'exists', 'Whether the bucket exists', BUCKET_LABELS
)
BUCKET_INCOMPLETE_UPLOADS = MetricDescriptor(
    'bucket', 'incomplete_uploads_number',
    'The total number of incomplete uploads per bucket', BUCKET_LABELS
)
