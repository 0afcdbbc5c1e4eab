import threading
import time
from typing import Optional

import requests
import urllib3
from requests.adapters import HTTPAdapter

from .constants import (
    CONNECT_TIMEOUT,
    CONTENT_TYPE_FORM,
    ERROR_BODY_EXCERPT,
    POOL_CONNECTIONS,
    POOL_MAXSIZE,
    SEND_TIMEOUT,
)
from .exceptions import PushoverAPIError, PushoverError, SendRequestError
from .models import PushoverMessage


def create_optimized_session() -> requests.Session:
    """Session com pool pequeno e sem compressão (a API do Pushover não usa)."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=POOL_CONNECTIONS, pool_maxsize=POOL_MAXSIZE, max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers["Accept-Encoding"] = "identity"
    return session


class PushoverClient:
    def __init__(self, session: requests.Session, url: str):
        self.session = session
        self.url = url

    def send_message(self, msg: Optional[PushoverMessage], timeout: float = SEND_TIMEOUT) -> None:
        """Envia uma notificação, sem retries.

        ``timeout`` é um prazo de relógio para a chamada inteira (conexão,
        headers e corpo). Os timeouts do socket valem por operação, então
        um upstream que pinga bytes devagar os contornaria; por isso o envio
        roda numa thread daemon e quem chama espera no máximo ``timeout``.
        """
        if msg is None:
            raise PushoverError("message is nil")

        deadline = time.monotonic() + timeout
        outcome = {}
        done = threading.Event()

        def worker():
            try:
                self._post(msg, timeout, deadline)
            except Exception as exc:
                outcome['error'] = exc
            finally:
                done.set()

        threading.Thread(target=worker, name='pushover-send', daemon=True).start()
        if not done.wait(timeout):
            raise SendRequestError(TimeoutError(f"deadline of {timeout}s exceeded"))
        if 'error' in outcome:
            raise outcome['error']

    def _post(self, msg: PushoverMessage, timeout: float, deadline: float) -> None:
        try:
            resp = self.session.post(
                self.url,
                data=msg.to_form(),
                headers={"Content-Type": CONTENT_TYPE_FORM},
                timeout=urllib3.Timeout(connect=min(CONNECT_TIMEOUT, timeout), total=timeout),
                stream=True,
            )
        except requests.RequestException as exc:
            raise SendRequestError(exc) from exc

        try:
            if resp.status_code != 200:
                # só um trecho do corpo para diagnóstico; o resto é descartado
                excerpt = resp.raw.read(ERROR_BODY_EXCERPT, decode_content=False) or b""
                raise PushoverAPIError(resp.status_code, excerpt.decode("utf-8", errors="replace"))
            # drena o corpo para devolver a conexão ao pool
            for _ in resp.iter_content(chunk_size=ERROR_BODY_EXCERPT):
                if time.monotonic() > deadline:
                    raise SendRequestError(TimeoutError(f"deadline of {timeout}s exceeded"))
        except (requests.RequestException, urllib3.exceptions.HTTPError) as exc:
            raise SendRequestError(exc) from exc
        finally:
            resp.close()
