"""Ciclo de vida do servidor HTTP.

Usa o servidor WSGI threaded do werkzeug (o mesmo do ``app.run`` do Flask),
uma thread por conexão. O socket é criado aqui para que erro de bind vire
exceção em vez de ``sys.exit`` dentro do werkzeug.
"""
import signal
import socket
import threading
import time
from typing import Optional

import requests
from werkzeug.serving import WSGIRequestHandler, make_server

from .config import Config
from .constants import READ_TIMEOUT, SHUTDOWN_TIMEOUT
from .exceptions import HealthCheckError, ServerStartError, ShutdownError
from .ports import Logger
from .utils import parse_listen_address


class TimeoutRequestHandler(WSGIRequestHandler):
    # timeout do socket de cada conexão (vale para leitura e escrita)
    timeout = READ_TIMEOUT


class InflightTracker:
    """Middleware WSGI que conta requisições em andamento."""

    def __init__(self, app):
        self.app = app
        self._count = 0
        self._cond = threading.Condition()

    @property
    def inflight(self) -> int:
        with self._cond:
            return self._count

    def __call__(self, environ, start_response):
        with self._cond:
            self._count += 1
        try:
            app_iter = self.app(environ, start_response)
            try:
                return list(app_iter)
            finally:
                if hasattr(app_iter, 'close'):
                    app_iter.close()
        finally:
            with self._cond:
                self._count -= 1
                self._cond.notify_all()

    def wait_idle(self, timeout: float) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout)


class Server:
    def __init__(self, config: Config, app, logger: Logger):
        self.config = config
        self.logger = logger
        self.host, self.port = parse_listen_address(config.port)
        self.tracker = InflightTracker(app)
        self._httpd = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Abre o listener e serve em background (não bloqueia)."""
        self.logger.info('server_starting', address=self.config.port)
        try:
            family = socket.AF_INET6 if ':' in self.host else socket.AF_INET
            sock = socket.create_server((self.host, self.port), family=family)
        except OSError as exc:
            self.logger.error('server_start_failed', address=self.config.port, error=str(exc))
            raise ServerStartError(f"server failed to start on {self.config.port}: {exc}") from exc

        try:
            self._httpd = make_server(
                self.host,
                self.port,
                self.tracker,
                threaded=True,
                request_handler=TimeoutRequestHandler,
                fd=sock.fileno(),
            )
        finally:
            # o werkzeug duplica o descritor
            sock.close()

        self.port = self._httpd.socket.getsockname()[1]
        self._thread = threading.Thread(
            target=self._httpd.serve_forever,
            name='flux-pushover-server',
            daemon=True,
        )
        self._thread.start()
        self.logger.info('server_started', host=self.host, port=self.port)

    def shutdown(self, timeout: float = SHUTDOWN_TIMEOUT) -> None:
        """Para de aceitar conexões e espera as requisições em andamento.

        Se algo continuar rodando depois de ``timeout`` segundos, levanta
        ShutdownError; as threads de conexão são daemon e morrem com o processo.
        """
        self.logger.info('server_shutting_down', inflight=self.tracker.inflight)
        if self._httpd is None:
            return

        deadline = time.monotonic() + timeout
        self._httpd.shutdown()
        if not self.tracker.wait_idle(timeout):
            raise ShutdownError(
                f"server forced to shutdown: {self.tracker.inflight} request(s) still running after {timeout}s"
            )
        self._thread.join(max(0.0, deadline - time.monotonic()))
        if self._thread.is_alive():
            raise ShutdownError(f"server forced to shutdown: listener did not stop within {timeout}s")

        self._httpd = None
        self.logger.info('server_exited')

    def wait_for_shutdown(self, stop: Optional[threading.Event] = None, timeout: float = SHUTDOWN_TIMEOUT) -> None:
        """Bloqueia até SIGINT/SIGTERM (ou ``stop``) e faz o shutdown gracioso."""
        stop = stop or threading.Event()

        def _on_signal(signum, frame):
            self.logger.info('shutdown_signal_received', signal=signal.Signals(signum).name)
            stop.set()

        previous = {sig: signal.signal(sig, _on_signal) for sig in (signal.SIGINT, signal.SIGTERM)}
        try:
            while not stop.wait(0.5):
                pass
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)

        self.shutdown(timeout)


def health_check(url: str, timeout: float = 3) -> None:
    """GET único no /health local, usado pelo HEALTHCHECK do container."""
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise HealthCheckError(f"health check failed: {exc}") from exc
    with resp:
        if resp.status_code != 200:
            raise HealthCheckError(f"health check returned status {resp.status_code}")
