from __future__ import annotations

import argparse
import logging
import sys
from wsgiref.simple_server import make_server

from prometheus_client import CollectorRegistry, generate_latest, make_wsgi_app

from zhone_exporter.collector import ZhoneCollector
from zhone_exporter.config import apply_overrides, load_config
from zhone_exporter.errors import ScrapeError
from zhone_exporter.logging_utils import configure_logging, resolve_log_level

logger = logging.getLogger("zhone_exporter")

LANDING_PAGE = b"""<!DOCTYPE html>
<html><head><title>Zhone Exporter</title></head>
<body><h1>Zhone Exporter</h1><p><a href="/metrics">Metrics</a></p></body></html>
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Prometheus exporter for Zhone GPON gateways",
    )
    parser.add_argument("host", nargs="?", help="Hostname or IP of the gateway to query")
    parser.add_argument("-u", "--username", help="Web UI username (default: user)")
    parser.add_argument("-p", "--password", help="Web UI password (default: user)")
    parser.add_argument("-l", "--listen", help="Listen address (default: :2112)")
    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-request timeout in seconds (default: 10)",
    )
    parser.add_argument("--config", help="Path to CFG configuration file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Enable debug logging (-v) or trace logging (-vv)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Scrape the gateway once, print the metrics and exit",
    )
    return parser


def build_app(registry: CollectorRegistry):
    """WSGI app that runs a fresh collection whenever /metrics is requested."""
    metrics_app = make_wsgi_app(registry)

    def app(environ, start_response):
        path = environ.get("PATH_INFO", "/")
        if path == "/metrics":
            try:
                return metrics_app(environ, start_response)
            except ScrapeError as exc:
                logger.error("Collection failed: %s", exc)
                start_response(
                    "500 Internal Server Error",
                    [("Content-Type", "text/plain; charset=utf-8")],
                )
                return [f"Collection failed: {exc}\n".encode("utf-8")]
        if path == "/":
            start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
            return [LANDING_PAGE]
        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]

    return app


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(resolve_log_level(args.verbose, args.log_level))

    try:
        config = load_config(args.config, host=args.host)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    config = apply_overrides(
        config,
        username=args.username,
        password=args.password,
        listen_address=args.listen,
        timeout_s=args.timeout,
    )

    registry = CollectorRegistry()
    registry.register(ZhoneCollector(config.device))

    if args.once:
        try:
            sys.stdout.write(generate_latest(registry).decode("utf-8"))
        except ScrapeError as exc:
            logger.error("Collection failed: %s", exc)
            return 1
        return 0

    try:
        host, port = config.server.bind
    except ValueError as exc:
        parser.error(str(exc))
    server = make_server(host, port, build_app(registry))
    logger.info(
        "Exporting metrics for %s on http://%s:%s/metrics",
        config.device.host,
        host or "0.0.0.0",
        port,
    )
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Zhone exporter stopped.")
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
