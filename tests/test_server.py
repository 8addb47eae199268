"""
Tests for the HTTP routes and the command-line entry point.
"""

from unittest.mock import patch
from wsgiref.util import setup_testing_defaults

import pytest
from prometheus_client import CollectorRegistry

from minio_exporter import __version__
from minio_exporter.collectors import MinioCollector, build_registry
from minio_exporter.main import build_parser, main
from minio_exporter.server import create_app


def call_app(app, path):
    """Issue a GET against a WSGI app, returning (status, headers, body)"""
    environ = {'PATH_INFO': path, 'REQUEST_METHOD': 'GET'}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured['status'] = status
        captured['headers'] = dict(headers)

    body = b''.join(app(environ, start_response))
    return captured['status'], captured['headers'], body


class TestRoutes:

    @pytest.fixture
    def registry(self, admin, data):
        return build_registry(MinioCollector(admin, data))

    def test_metrics_path(self, registry):
        status, headers, body = call_app(create_app(registry, '/metrics'), '/metrics')

        assert status.startswith('200')
        assert headers['Content-Type'].startswith('text/plain')
        assert b'minio_scrape_collector_success 1.0' in body
        assert b'minio_scrape_collector_duration_seconds' in body

    def test_custom_metrics_path(self, registry):
        app = create_app(registry, '/prom')

        assert call_app(app, '/prom')[0].startswith('200')
        assert call_app(app, '/metrics')[0].startswith('404')

    def test_landing_page_links_to_metrics(self, registry):
        status, headers, body = call_app(create_app(registry, '/prom'), '/')

        assert status.startswith('200')
        assert headers['Content-Type'].startswith('text/html')
        assert b"<a href='/prom'>Metrics</a>" in body

    def test_unknown_path_is_404(self, registry):
        status, _, _ = call_app(create_app(registry), '/favicon.ico')

        assert status.startswith('404')

    def test_upstream_outage_still_returns_200(self, admin, data):
        for method in (admin.server_info, admin.storage_info):
            method.side_effect = ConnectionError('connection refused')
        registry = CollectorRegistry()
        registry.register(MinioCollector(admin, data))

        status, _, body = call_app(create_app(registry), '/metrics')

        assert status.startswith('200')
        assert b'minio_scrape_collector_success 0.0' in body


class TestMain:

    def test_version_exits_zero(self, capsys):
        assert main(['--version']) == 0
        assert __version__ in capsys.readouterr().out

    def test_parser_leaves_unset_flags_empty(self):
        args = build_parser().parse_args([])

        assert args.minio_url is None
        assert args.bucket_stats is None

    def test_help_lists_renamed_counters(self):
        help_text = build_parser().format_help()

        assert 'minio_uptime_total' in help_text
        assert 'minio_server_uptime_total' in help_text

    def test_parser_bucket_stats_flags(self):
        parser = build_parser()

        assert parser.parse_args(['--minio.bucket-stats']).bucket_stats is True
        assert parser.parse_args(['--no-minio.bucket-stats']).bucket_stats is False

    @patch('minio_exporter.main.setup_logging')
    @patch('minio_exporter.main.serve')
    def test_invalid_uri_exits_non_zero(self, mock_serve, mock_logging):
        assert main(['--minio.server', 'ftp://host']) == 1
        mock_serve.assert_not_called()

    def test_invalid_config_exits_non_zero(self):
        assert main(['--web.telemetry-path', 'metrics']) == 1

    @patch('minio_exporter.main.setup_logging')
    @patch('minio_exporter.main.serve')
    @patch('minio_exporter.connectors.minio_connector.Minio')
    @patch('minio_exporter.connectors.minio_connector.MinioAdmin')
    def test_bind_failure_exits_non_zero(self, mock_admin, mock_minio, mock_serve, mock_logging):
        mock_serve.side_effect = OSError('Address already in use')

        assert main(['--minio.server', 'localhost:9000']) == 1

    @patch('minio_exporter.main.setup_logging')
    @patch('minio_exporter.main.serve')
    @patch('minio_exporter.connectors.minio_connector.Minio')
    @patch('minio_exporter.connectors.minio_connector.MinioAdmin')
    def test_serves_registry_with_config(self, mock_admin, mock_minio, mock_serve, mock_logging):
        assert main(['--minio.server', 'localhost:9000', '--web.listen-address', ':9999']) == 0

        config, registry = mock_serve.call_args.args
        assert config.listen_port == 9999
        assert isinstance(registry, CollectorRegistry)

    @patch('minio_exporter.main.setup_logging')
    @patch('minio_exporter.main.serve')
    @patch('minio_exporter.connectors.minio_connector.Minio')
    @patch('minio_exporter.connectors.minio_connector.MinioAdmin')
    def test_config_file_flag(self, mock_admin, mock_minio, mock_serve, mock_logging, tmp_path):
        config_file = tmp_path / 'exporter.yml'
        config_file.write_text("listen_address: ':9998'\nbucket_stats: true\n")

        assert main(['--config.file', str(config_file)]) == 0

        config, _ = mock_serve.call_args.args
        assert config.listen_port == 9998
        assert config.bucket_stats is True

    @patch('minio_exporter.main.setup_logging')
    @patch('minio_exporter.main.serve')
    @patch('minio_exporter.connectors.minio_connector.Minio')
    @patch('minio_exporter.connectors.minio_connector.MinioAdmin')
    def test_each_run_builds_its_own_config(self, mock_admin, mock_minio, mock_serve, mock_logging):
        main(['--minio.server', 'first:9000'])
        main(['--minio.server', 'second:9000'])

        first, second = [call.args[0] for call in mock_serve.call_args_list]
        assert first.minio_url == 'first:9000'
        assert second.minio_url == 'second:9000'
