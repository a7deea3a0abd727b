"""Request payloads and response envelopes for the Pairing API."""
from __future__ import annotations

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

MQTT_V1_PROTOCOL = "astarte_mqtt_v1"

T = TypeVar("T")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class RegistrationRequest(_Frozen):
    hw_id: str
    # Passed through untouched when set.
    initial_introspection: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class RegistrationResult(_Frozen):
    credentials_secret: str


class CertificateRequest(_Frozen):
    csr: str

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class CertificateResult(_Frozen):
    client_crt: str


class ProtocolInfo(_Frozen):
    """Connectivity information for a device on ``astarte_mqtt_v1``.

    Fields other than ``broker_url`` are kept as extras and remain reachable
    through ``model_extra``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    broker_url: str


class DeviceProtocols(_Frozen):
    astarte_mqtt_v1: ProtocolInfo


class DeviceStatus(_Frozen):
    protocols: DeviceProtocols


class DataEnvelope(_Frozen, Generic[T]):
    """The ``{"data": ...}`` wrapper around every Pairing API reply."""

    data: T


__all__ = [
    "MQTT_V1_PROTOCOL",
    "RegistrationRequest",
    "RegistrationResult",
    "CertificateRequest",
    "CertificateResult",
    "ProtocolInfo",
    "DeviceProtocols",
    "DeviceStatus",
    "DataEnvelope",
]
