# minio_exporter/server.py
"""
HTTP serving layer.

GET <metrics path> serves the registry through prometheus_client's WSGI app,
GET / serves a landing page, everything else is 404.
"""

import html
import logging
import socket
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app

logger = logging.getLogger(__name__)

LANDING_PAGE = """<html>
<head><title>MinIO Exporter</title></head>
<body>
<h1>MinIO Exporter</h1>
<p><a href='{metrics_path}'>Metrics</a></p>
</body>
</html>
"""


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """WSGI server handling each scrape in its own thread"""
    daemon_threads = True


class ThreadingWSGIServerV6(ThreadingWSGIServer):
    address_family = socket.AF_INET6


class QuietRequestHandler(WSGIRequestHandler):
    """Send per-request access logs to the debug log instead of stderr"""

    def log_message(self, format, *args):
        logger.debug(f"{self.address_string()} - {format % args}")


def create_app(registry: CollectorRegistry, metrics_path: str = '/metrics'):
    """
    Build the exporter WSGI application.

    Args:
        registry: Registry served on the metrics path
        metrics_path: Path under which to expose metrics
    """
    metrics_app = make_wsgi_app(registry)
    landing_page = LANDING_PAGE.format(metrics_path=html.escape(metrics_path, quote=True)).encode('utf-8')

    def app(environ, start_response):
        path = environ.get('PATH_INFO') or '/'

        if path == metrics_path:
            return metrics_app(environ, start_response)

        if path == '/':
            start_response('200 OK', [('Content-Type', 'text/html; charset=utf-8')])
            return [landing_page]

        start_response('404 Not Found', [('Content-Type', 'text/plain; charset=utf-8')])
        return [b'404 page not found\n']

    return app


def create_server(host: str, port: int, app) -> WSGIServer:
    """
    Bind the HTTP listener.

    Raises:
        OSError: If the address cannot be bound
    """
    server_class = ThreadingWSGIServerV6 if ':' in host else ThreadingWSGIServer
    return make_server(host, port, app, server_class=server_class, handler_class=QuietRequestHandler)


def serve(config, registry: CollectorRegistry):
    """Serve the exporter until interrupted"""
    app = create_app(registry, config.metrics_path)
    httpd = create_server(config.listen_host, config.listen_port, app)

    logger.info(f"Listening on {config.listen_address}")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        httpd.server_close()
