"""Interfaces dos colaboradores injetados no controller e no servidor."""
from typing import Optional, Protocol

from .models import PushoverMessage


class Logger(Protocol):
    def info(self, event: str, **kw) -> None: ...

    def error(self, event: str, **kw) -> None: ...


class NotificationSender(Protocol):
    def send_message(self, msg: Optional[PushoverMessage], timeout: float = ...) -> None: ...
