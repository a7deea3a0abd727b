from __future__ import annotations

import pytest
from pydantic import ValidationError

from astarte_pairing.models import (
    CertificateRequest,
    DataEnvelope,
    ProtocolInfo,
    RegistrationRequest,
    RegistrationResult,
)


def test_registration_payload_omits_unset_introspection():
    assert RegistrationRequest(hw_id="abc").to_payload() == {"hw_id": "abc"}


def test_certificate_payload():
    assert CertificateRequest(csr="CSR").to_payload() == {"csr": "CSR"}


def test_models_are_frozen():
    info = ProtocolInfo(broker_url="ssl://x:8883")
    with pytest.raises(ValidationError):
        info.broker_url = "ssl://y:8883"


def test_envelope_ignores_unknown_fields():
    envelope = DataEnvelope[RegistrationResult].model_validate_json(
        b'{"data": {"credentials_secret": "s", "extra": 1}, "links": {}}'
    )
    assert envelope.data == RegistrationResult(credentials_secret="s")
