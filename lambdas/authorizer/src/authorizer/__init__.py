"""Custom authorizer Lambda for mTLS partner permissions."""

from ._types import (
    APIGatewayAuthorizerEvent,
    AuthorizerPolicyResponse,
    LambdaContext,
)
from .engine import AuthorizationEngine
from .permission_store import (
    FilePermissionStore,
    InMemoryPermissionStore,
    PermissionStore,
    S3PermissionStore,
)
from .responses import AuthorizationDecision, PolicyRenderer

__all__ = [
    "AuthorizationEngine",
    "AuthorizationDecision",
    "PolicyRenderer",
    "PermissionStore",
    "InMemoryPermissionStore",
    "FilePermissionStore",
    "S3PermissionStore",
    "APIGatewayAuthorizerEvent",
    "AuthorizerPolicyResponse",
    "LambdaContext",
]
