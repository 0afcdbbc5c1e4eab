"""Payloads: alerta recebido do FluxCD e mensagem enviada ao Pushover."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _StrictPayload(BaseModel):
    # campos desconhecidos ou com tipo errado invalidam o payload inteiro
    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        # null num campo conhecido equivale a campo ausente (string vazia / objeto vazio)
        if isinstance(data, dict):
            known = {field.alias or name for name, field in cls.model_fields.items()}
            return {k: v for k, v in data.items() if not (v is None and k in known)}
        return data


class InvolvedObject(_StrictPayload):
    kind: str = ""
    namespace: str = ""
    name: str = ""
    uid: str = ""
    api_version: str = Field("", alias="apiVersion")
    resource_version: str = Field("", alias="resourceVersion")


class AlertMetadata(_StrictPayload):
    commit_status: str = ""
    revision: str = ""
    summary: str = ""


class FluxAlert(_StrictPayload):
    involved_object: InvolvedObject = Field(default_factory=InvolvedObject, alias="involvedObject")
    severity: str = ""
    timestamp: str = ""
    message: str = ""
    reason: str = ""
    metadata: AlertMetadata = Field(default_factory=AlertMetadata)
    reporting_controller: str = Field("", alias="reportingController")
    reporting_instance: str = Field("", alias="reportingInstance")


class PushoverMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    user: str
    title: str
    message: str

    def to_form(self):
        return {
            "token": self.token,
            "user": self.user,
            "message": self.message,
            "title": self.title,
        }
