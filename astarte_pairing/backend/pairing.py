"""Client for the Astarte Pairing API."""
from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..errors import DecodeError
from ..models import (
    MQTT_V1_PROTOCOL,
    CertificateRequest,
    CertificateResult,
    DataEnvelope,
    DeviceStatus,
    ProtocolInfo,
    RegistrationRequest,
    RegistrationResult,
)
from .http_client import HttpTransport, HttpxTransport

M = TypeVar("M", bound=BaseModel)


class PairingClient:
    """Thin wrapper around the `/v1/{realm}/...` Pairing API endpoints.

    Holds nothing but the base URL and the transport, so one instance can
    serve any number of concurrent calls. A transport created by
    :meth:`from_settings` is owned by the client and closed by :meth:`aclose`.
    """

    def __init__(self, base_url: str, transport: HttpTransport) -> None:
        self._base_url = httpx.URL(base_url)
        self._transport = transport
        self._owned_transport: Optional[HttpxTransport] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PairingClient":
        transport = HttpxTransport(timeout=settings.request_timeout, user_agent=settings.user_agent)
        client = cls(settings.pairing_url, transport)
        client._owned_transport = transport
        return client

    @property
    def base_url(self) -> str:
        return str(self._base_url)

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    async def aclose(self) -> None:
        if self._owned_transport is not None:
            await self._owned_transport.aclose()

    async def __aenter__(self) -> "PairingClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def register_device(
        self,
        realm: str,
        device_id: str,
        token: str,
        *,
        initial_introspection: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Register ``device_id`` in ``realm`` and return its credentials secret.

        ``token`` must be a realm token allowed to use the agent API.
        """
        payload = RegistrationRequest(hw_id=device_id, initial_introspection=initial_introspection)
        body = await self._transport.request(
            "POST",
            self._url(realm, "agent", "devices"),
            token=token,
            expected_status=201,
            json=payload.to_payload(),
        )
        return _decode(RegistrationResult, body).credentials_secret

    async def unregister_device(self, realm: str, device_id: str, token: str) -> None:
        """Reset the registration state of a device so it can register again.

        Data already stored for the device is left untouched by the service.
        """
        await self._transport.request(
            "DELETE",
            self._url(realm, "agent", "devices", device_id),
            token=token,
            expected_status=204,
        )

    async def obtain_certificate(self, realm: str, device_id: str, credentials_secret: str, csr: str) -> str:
        """Exchange a CSR for a client certificate on ``astarte_mqtt_v1``.

        Meant to be called by the device itself, authenticated with its own
        credentials secret.
        """
        payload = CertificateRequest(csr=csr)
        body = await self._transport.request(
            "POST",
            self._url(realm, "devices", device_id, "protocols", MQTT_V1_PROTOCOL, "credentials"),
            token=credentials_secret,
            expected_status=201,
            json=payload.to_payload(),
        )
        return _decode(CertificateResult, body).client_crt

    async def get_protocol_info(self, realm: str, device_id: str, credentials_secret: str) -> ProtocolInfo:
        """Return ``astarte_mqtt_v1`` connection info (broker URL and friends)."""
        body = await self._transport.request(
            "GET",
            self._url(realm, "devices", device_id),
            token=credentials_secret,
            expected_status=200,
        )
        return _decode(DeviceStatus, body).protocols.astarte_mqtt_v1

    def _url(self, realm: str, *segments: str) -> str:
        # Each segment is escaped whole, so "/", "?" and "#" in an id stay inside it.
        escaped = [quote(segment, safe="") for segment in (realm, *segments)]
        path = "/".join([self._base_url.path.rstrip("/"), "v1", *escaped])
        return str(self._base_url.copy_with(path=path))


def _decode(model: Type[M], body: bytes) -> M:
    try:
        return DataEnvelope[model].model_validate_json(body).data  # type: ignore[valid-type]
    except ValidationError as exc:
        raise DecodeError(f"Unexpected {model.__name__} response: {exc}") from exc


__all__ = ["PairingClient"]
