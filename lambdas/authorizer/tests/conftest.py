"""Fixtures for authorizer lambda tests."""

from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from authorizer import handler as handler_module
from authorizer._types import APIGatewayAuthorizerEvent, LambdaContext, PermissionRecord
from authorizer.logging_config import LOGGER

# sha256("CA1:Partner1:01AB")
PARTNER1_FINGERPRINT = "eea84b00dfdb50cf8aaa10894e8d7cf346af14f6e030d197624ec079679aad9a"


def _name(common_name: str | None) -> x509.Name:
    attributes = [x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Test Org")]
    if common_name is not None:
        attributes.append(x509.NameAttribute(NameOID.COMMON_NAME, common_name))
    return x509.Name(attributes)


def build_client_cert_pem(
    issuer_cn: str | None = "CA1",
    subject_cn: str | None = "Partner1",
    serial_number: int = 0x01AB,
) -> str:
    """Build a self-contained client certificate and return it as PEM text."""
    key = ec.generate_private_key(ec.SECP256R1())
    not_before = datetime.now(UTC)
    cert = (
        x509.CertificateBuilder()
        .subject_name(_name(subject_cn))
        .issuer_name(_name(issuer_cn))
        .public_key(key.public_key())
        .serial_number(serial_number)
        .not_valid_before(not_before)
        .not_valid_after(not_before + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM).decode("utf-8")


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set a predictable environment and reset the cached engine for all tests."""
    monkeypatch.setenv("AWS_REGION", "eu-west-2")
    for name in (
        "PERMISSIONS_BUCKET",
        "PERMISSIONS_KEY",
        "PERMISSIONS_FILE",
        "PERMISSIONS_FETCH_TIMEOUT",
        "PERMISSIONS_FETCH_MAX_ATTEMPTS",
        "POLICY_VERSION",
        "DEFAULT_PRINCIPAL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(handler_module, "_engine", None)


@pytest.fixture
def lambda_context() -> LambdaContext:
    """Create mock Lambda context."""
    ctx = LambdaContext()
    ctx.function_name = "mtls-partner-authorizer"
    ctx.memory_limit_in_mb = 128
    ctx.invoked_function_arn = "arn:aws:lambda:eu-west-2:123456789:function:mtls-partner-authorizer"
    ctx.aws_request_id = "test-request-id"
    return ctx


@pytest.fixture
def partner_cert_pem() -> str:
    """Client cert with issuer CN CA1, subject CN Partner1, serial 01AB."""
    return build_client_cert_pem()


@pytest.fixture
def base_event() -> APIGatewayAuthorizerEvent:
    """REST API authorizer event without mTLS cert."""
    return {
        "type": "REQUEST",
        "methodArn": "arn:aws:execute-api:eu-west-2:123456789:abc123/prod/GET/products",
        "resource": "/products",
        "path": "/products",
        "httpMethod": "GET",
        "headers": {},
        "requestContext": {
            "accountId": "123456789",
            "apiId": "abc123",
            "stage": "prod",
            "identity": {"sourceIp": "203.0.113.10"},
        },
    }


@pytest.fixture
def make_event(
    base_event: APIGatewayAuthorizerEvent,
) -> Callable[[str], APIGatewayAuthorizerEvent]:
    """Factory putting a PEM into the REST API identity context."""

    def _make(pem: str) -> APIGatewayAuthorizerEvent:
        base_event["requestContext"]["identity"]["clientCert"] = {  # type: ignore[reportTypedDictNotRequiredAccess]
            "clientCertPem": pem,
            "subjectDN": "CN=Partner1,O=Test Org",
            "issuerDN": "CN=CA1,O=Test Org",
            "serialNumber": "01:AB",
        }
        return base_event

    return _make


@pytest.fixture
def event_with_mtls_cert(
    make_event: Callable[[str], APIGatewayAuthorizerEvent], partner_cert_pem: str
) -> APIGatewayAuthorizerEvent:
    """REST API event carrying the Partner1 certificate."""
    return make_event(partner_cert_pem)


@pytest.fixture
def products_permission() -> PermissionRecord:
    """Allow entry for GET products* on the prod stage."""
    return {
        "api": "arn:aws:execute-api:eu-west-2:123456789:abc123",
        "resource": "products*",
        "stage": "prod",
        "method": "GET",
        "effect": "Allow",
    }


@pytest.fixture
def audit_log(caplog: pytest.LogCaptureFixture) -> Generator[pytest.LogCaptureFixture]:
    """Capture records from the non-propagating authorizer logger."""
    LOGGER.addHandler(caplog.handler)
    yield caplog
    LOGGER.removeHandler(caplog.handler)


@pytest.fixture
def cert_factory() -> Callable[..., str]:
    """Expose build_client_cert_pem to tests needing custom certificates."""
    return build_client_cert_pem


@pytest.fixture
def partner1_fingerprint() -> str:
    """Fingerprint of the Partner1 certificate."""
    return PARTNER1_FINGERPRINT
