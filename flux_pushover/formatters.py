from typing import Callable, Dict, Optional

from .config import Config
from .constants import APP_TITLE, DEFAULT_NAMESPACE, DEFAULT_SEVERITY, DEFAULT_VALUE, NO_MESSAGE
from .models import FluxAlert, PushoverMessage
from .utils import default_if_empty, normalize_string

MessageBuilder = Callable[[FluxAlert], str]


def build_pushover_message(alert: FluxAlert) -> str:
    """Monta o texto da notificação a partir do alerta do Flux.

    Função pura: mesmo alerta, mesmo texto. Campos vazios recebem defaults
    ("INFO", "Unknown", "No Message"). O kind vazio vira "unknown" porque o
    default também é convertido para minúsculas.
    """
    severity = normalize_string(alert.severity, DEFAULT_SEVERITY, str.upper)
    reason = default_if_empty(alert.reason, DEFAULT_VALUE)
    controller = default_if_empty(alert.reporting_controller, DEFAULT_VALUE)
    revision = default_if_empty(alert.metadata.revision, DEFAULT_VALUE)
    kind = normalize_string(alert.involved_object.kind, DEFAULT_VALUE, str.lower)
    object_name = default_if_empty(alert.involved_object.name, DEFAULT_VALUE)
    message = default_if_empty(alert.message, NO_MESSAGE)

    lines = [
        f"{reason} [{severity}]",
        message,
        "",
        f"Controller: {controller}",
        f"Object: {kind}/{object_name}",
        f"Revision: {revision}",
    ]
    return "\n".join(lines) + "\n"


def create_pushover_message(cfg: Config, message: str) -> PushoverMessage:
    return PushoverMessage(
        token=cfg.pushover_api_token,
        user=cfg.pushover_user_key,
        title=APP_TITLE,
        message=message,
    )


def validate_alert(alert: Optional[FluxAlert]) -> None:
    if alert is None:
        raise ValueError("alert is nil")


def extract_alert_info(alert: FluxAlert) -> Dict[str, str]:
    # usado só em log; aqui o kind não é normalizado
    return {
        'severity': default_if_empty(alert.severity, DEFAULT_SEVERITY),
        'reason': default_if_empty(alert.reason, DEFAULT_VALUE),
        'controller': default_if_empty(alert.reporting_controller, DEFAULT_VALUE),
        'revision': default_if_empty(alert.metadata.revision, DEFAULT_VALUE),
        'kind': default_if_empty(alert.involved_object.kind, DEFAULT_VALUE),
        'name': default_if_empty(alert.involved_object.name, DEFAULT_VALUE),
        'namespace': default_if_empty(alert.involved_object.namespace, DEFAULT_NAMESPACE),
        'message': default_if_empty(alert.message, NO_MESSAGE),
    }
