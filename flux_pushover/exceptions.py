"""Exceções do bridge Flux -> Pushover."""


class ConfigError(Exception):
    """Configuração inválida ou incompleta (fatal no startup)."""


class PushoverError(Exception):
    """Falha ao entregar a notificação ao Pushover."""


class SendRequestError(PushoverError):
    """Falha de transporte: DNS, conexão recusada, timeout."""

    def __init__(self, cause):
        super().__init__(f"failed to send request: {cause}")
        self.cause = cause


class PushoverAPIError(PushoverError):
    """A API respondeu com status diferente de 200."""

    def __init__(self, status: int, body: str):
        super().__init__(f"pushover API returned status {status}: {body}")
        self.status = status
        self.body = body


class ServerError(Exception):
    pass


class ServerStartError(ServerError):
    pass


class ShutdownError(ServerError):
    pass


class HealthCheckError(ServerError):
    pass
