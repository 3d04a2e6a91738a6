"""Event parsing utilities for API Gateway authorizer events."""

from ._types import APIGatewayAuthorizerEvent, ClientCert


def _client_cert(event: APIGatewayAuthorizerEvent) -> ClientCert:
    request_context = event.get("requestContext") or {}
    # REST APIs put the cert under identity, HTTP APIs under authentication
    identity = request_context.get("identity") or {}
    authentication = request_context.get("authentication") or {}
    return identity.get("clientCert") or authentication.get("clientCert") or {}


def extract_client_cert_pem(event: APIGatewayAuthorizerEvent | None) -> str | None:
    """Extract mTLS client certificate PEM from request context."""
    if not event:
        return None
    pem = _client_cert(event).get("clientCertPem")
    if not isinstance(pem, str) or not pem.strip():
        return None
    return pem
