"""Custom authorizer Lambda - maps mTLS client certs to IAM policies."""

from ._types import APIGatewayAuthorizerEvent, AuthorizerPolicyResponse, LambdaContext
from .config import AuthorizerConfig
from .engine import AuthorizationEngine
from .logging_config import LOGGER
from .permission_store import build_permission_store
from .responses import PolicyRenderer

# Global engine (cached across invocations, holds no request state)
_engine: AuthorizationEngine | None = None


def get_engine() -> AuthorizationEngine:
    """Get cached engine built from the Lambda environment."""
    global _engine
    if _engine is None:
        config = AuthorizerConfig.from_env()
        _engine = AuthorizationEngine(
            store=build_permission_store(config),
            renderer=PolicyRenderer(config.policy),
        )
    return _engine


def handler(event: APIGatewayAuthorizerEvent, context: LambdaContext) -> AuthorizerPolicyResponse:
    """Return an IAM policy for the client certificate on the request.

    Flow:
    1. Extract client certificate PEM from the request context
    2. Derive issuer CN, subject CN and serial number
    3. Hash them into the partner fingerprint
    4. Look up the fingerprint in the permissions document
    5. Render the permissions, or deny-all, as an IAM policy

    An engine that cannot be built (bad region, broken client config) is not
    cached, and the request is denied.
    """
    try:
        engine = get_engine()
    except Exception as e:
        LOGGER.exception(
            "Unable to build authorization engine: %s",
            e,
            extra={"outcome": "denied", "reason": "engine_unavailable"},
        )
        return PolicyRenderer().deny_all().to_response()

    return engine.authorize(event).to_response()
