"""Entrypoint do processo.

Sem argumentos sobe o servidor; ``-health`` faz um GET no /health local e
sai com 0/1 (HEALTHCHECK do container). Só este módulo decide encerrar o
processo.
"""
import argparse
import os
import threading
from typing import Optional

from .config import ConfigLoader, default_config_loader, validate_config, with_validation
from .constants import DEFAULT_PORT, ENV_DEBUG_MODE, ENV_LOG_FORMAT, ENV_PORT
from .controller import create_app, create_server_dependencies
from .exceptions import ConfigError, HealthCheckError, ServerError
from .logging import get_logger, setup_logging
from .ports import Logger
from .server import Server, health_check


def run_app(config_loader: ConfigLoader, logger: Logger, stop: Optional[threading.Event] = None) -> None:
    cfg = with_validation(config_loader, validate_config)()

    deps = create_server_dependencies(cfg, logger)
    app = create_app(deps)

    srv = Server(cfg, app, logger)
    srv.start()
    srv.wait_for_shutdown(stop)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='flux-pushover', description='FluxCD -> Pushover webhook bridge')
    parser.add_argument('-health', action='store_true', help='check the local /health endpoint and exit')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.health:
        port = os.getenv(ENV_PORT) or DEFAULT_PORT
        try:
            health_check(f"http://localhost:{port}/health")
        except HealthCheckError:
            return 1
        return 0

    setup_logging(
        debug=os.getenv(ENV_DEBUG_MODE, "False").lower() == "true",
        fmt=os.getenv(ENV_LOG_FORMAT, "json").lower(),
    )
    logger = get_logger()
    try:
        run_app(default_config_loader, logger)
    except (ConfigError, ServerError) as exc:
        logger.error('application_failed', error=str(exc))
        return 1
    return 0
