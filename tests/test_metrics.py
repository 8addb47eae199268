"""
Tests for metric emission helpers and logging setup.
"""

import logging

import pytest

from minio_exporter.utils import metrics
from minio_exporter.utils.logging_config import setup_logging
from minio_exporter.utils.metrics import MetricDescriptor, build_fqname


class TestBuildFqname:

    def test_full_name(self):
        assert build_fqname('minio', 'bucket', 'exists') == 'minio_bucket_exists'

    def test_empty_subsystem_is_skipped(self):
        assert build_fqname('minio', '', 'uptime') == 'minio_uptime'


class TestMetricDescriptor:

    def test_gauge_sample(self):
        family = metrics.BUCKET_EXISTS.gauge(1, ['photos', 'us-east-1'])

        assert family.type == 'gauge'
        assert family.name == 'minio_bucket_exists'
        assert family.samples[0].labels == {'bucket': 'photos', 'location': 'us-east-1'}
        assert family.samples[0].value == 1.0

    def test_counter_sample(self):
        family = metrics.SERVER_UPTIME.counter(60, ['node1:9000'])

        assert family.type == 'counter'
        assert family.samples[0].name == 'minio_server_uptime_total'

    def test_label_arity_is_enforced(self):
        with pytest.raises(ValueError, match='expects 2 label values'):
            metrics.BUCKET_OBJECTS_NUMBER.gauge(10, ['photos'])

    def test_add_groups_samples_in_one_family(self):
        family = metrics.SERVER_UP.family()
        metrics.SERVER_UP.add(family, 1, ['n1:9000'])
        metrics.SERVER_UP.add(family, 0, ['n2:9000'])

        assert [sample.labels['minio_host'] for sample in family.samples] == ['n1:9000', 'n2:9000']

    def test_add_enforces_label_arity(self):
        with pytest.raises(ValueError, match='expects 1 label values'):
            metrics.SERVER_UP.add(metrics.SERVER_UP.family(), 1)

    def test_populated_drops_empty_families(self):
        empty = metrics.BUCKET_EXISTS.family()
        filled = metrics.SCRAPE_SUCCESS.gauge(1)

        assert metrics.populated([empty, filled]) == [filled]

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match='Unknown metric kind'):
            MetricDescriptor('bucket', 'exists', 'help').sample('histogram', 1)

    def test_bucket_metrics_share_labels(self):
        for descriptor in (metrics.BUCKET_OBJECTS_NUMBER, metrics.BUCKET_OBJECTS_TOTAL_SIZE,
                           metrics.BUCKET_EXISTS, metrics.BUCKET_INCOMPLETE_UPLOADS):
            assert descriptor.label_names == ('bucket', 'location')

    def test_meta_metric_names(self):
        assert metrics.SCRAPE_DURATION.fqname == 'minio_scrape_collector_duration_seconds'
        assert metrics.SCRAPE_SUCCESS.fqname == 'minio_scrape_collector_success'


class TestLoggingConfig:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_console_only(self):
        setup_logging('debug')

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger('urllib3').level == logging.WARNING

    def test_rotating_file(self, tmp_path):
        log_file = tmp_path / 'logs' / 'exporter.log'

        setup_logging('INFO', str(log_file))
        logging.getLogger('collector.minio').info('scrape finished')

        assert len(logging.getLogger().handlers) == 2
        assert 'scrape finished' in log_file.read_text()
