"""Configuração carregada do ambiente.

O loader recebe uma função de lookup (normalmente ``os.getenv``) em vez de ler
``os.environ`` direto, assim os testes injetam qualquer ambiente. A validação
é um passo separado e componível via ``with_validation``.
"""
import os
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from .constants import (
    BEARER_PREFIX,
    DEFAULT_PORT,
    DEFAULT_PUSHOVER_URL,
    ENV_API_TOKEN,
    ENV_PORT,
    ENV_PUSHOVER_URL,
    ENV_USER_KEY,
)
from .exceptions import ConfigError
from .utils import parse_listen_address


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    pushover_user_key: str = ""
    pushover_api_token: str = ""
    # "Bearer <token>", calculado uma vez no load
    bearer_token: str = ""
    port: str = ":" + DEFAULT_PORT
    pushover_url: str = DEFAULT_PUSHOVER_URL


ConfigLoader = Callable[[], Config]
ConfigValidator = Callable[[Optional[Config]], None]


def load_from_env(getenv: Callable[[str], Optional[str]]) -> ConfigLoader:
    def loader() -> Config:
        user_key = getenv(ENV_USER_KEY) or ""
        api_token = getenv(ENV_API_TOKEN) or ""
        port = getenv(ENV_PORT) or DEFAULT_PORT
        pushover_url = getenv(ENV_PUSHOVER_URL) or DEFAULT_PUSHOVER_URL

        return Config(
            pushover_user_key=user_key,
            pushover_api_token=api_token,
            bearer_token=BEARER_PREFIX + api_token if api_token else "",
            port=":" + port,
            pushover_url=pushover_url,
        )

    return loader


default_config_loader = load_from_env(os.getenv)


def validate_config(cfg: Optional[Config]) -> None:
    if cfg is None:
        raise ConfigError("config is nil")
    if not cfg.pushover_user_key:
        raise ConfigError(f"{ENV_USER_KEY} is required")
    if not cfg.pushover_api_token:
        raise ConfigError(f"{ENV_API_TOKEN} is required")
    parse_listen_address(cfg.port)


def with_validation(loader: ConfigLoader, *validators: ConfigValidator) -> ConfigLoader:
    """Aplica os validators em sequência; o primeiro que falhar interrompe."""

    def validated_loader() -> Config:
        cfg = loader()
        for validator in validators:
            validator(cfg)
        return cfg

    return validated_loader
