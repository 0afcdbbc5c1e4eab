from typing import Callable, Tuple

from .exceptions import ConfigError


def default_if_empty(value, default):
    if value == "":
        return default
    return value


def normalize_string(value: str, default: str, transform: Callable[[str], str]) -> str:
    # o default também passa pela transformação (ex.: "Unknown" -> "unknown")
    if value == "":
        return transform(default)
    return transform(value)


def parse_listen_address(addr: str) -> Tuple[str, int]:
    """Converte ":8080" / "127.0.0.1:8080" em (host, porta).

    Host vazio significa escutar em todas as interfaces. Porta que não é
    número ou fora de 0..65535 é erro de configuração.
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        host, port = "", addr
    host = host.strip("[]") or "0.0.0.0"
    try:
        number = int(port)
    except ValueError:
        raise ConfigError(f"invalid listen address: {addr!r}") from None
    if not 0 <= number <= 65535:
        raise ConfigError(f"invalid listen address: {addr!r}")
    return host, number
