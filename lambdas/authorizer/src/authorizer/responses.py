"""Response builders for authorizer Lambda."""

from collections.abc import Sequence
from dataclasses import dataclass

from ._types import AuthorizerPolicyResponse
from .config import PolicyConfig
from .permissions import Effect, PermissionEntry


@dataclass(frozen=True)
class PolicyStatement:
    action: str
    effect: Effect
    resource: str


@dataclass(frozen=True)
class AuthorizationDecision:
    """Principal plus ordered policy statements for one request."""

    principal_id: str
    statements: tuple[PolicyStatement, ...]
    version: str = PolicyConfig.version

    def to_response(self) -> AuthorizerPolicyResponse:
        """Serialize to the API Gateway authorizer policy payload."""
        return {
            "principalId": self.principal_id,
            "policyDocument": {
                "Version": self.version,
                "Statement": [
                    {
                        "Action": statement.action,
                        "Effect": statement.effect.value,
                        "Resource": statement.resource,
                    }
                    for statement in self.statements
                ],
            },
        }


class PolicyRenderer:
    """Turns permission entries into an authorization decision."""

    def __init__(self, config: PolicyConfig | None = None) -> None:
        self.config = config or PolicyConfig()

    def _principal(self, principal: str | None) -> str:
        return principal or self.config.default_principal

    def deny_all(self, principal: str | None = None) -> AuthorizationDecision:
        """Return a decision denying invocation of every resource."""
        return AuthorizationDecision(
            principal_id=self._principal(principal),
            statements=(
                PolicyStatement(
                    action=self.config.action,
                    effect=Effect.DENY,
                    resource=self.config.deny_all_resource,
                ),
            ),
            version=self.config.version,
        )

    def render(
        self, principal: str | None, permissions: Sequence[PermissionEntry] | None
    ) -> AuthorizationDecision:
        """Render one statement per entry in input order, or deny-all when empty."""
        if not permissions:
            return self.deny_all(principal)

        return AuthorizationDecision(
            principal_id=self._principal(principal),
            statements=tuple(
                PolicyStatement(
                    action=self.config.action,
                    effect=entry.effect,
                    resource=entry.resource_arn,
                )
                for entry in permissions
            ),
            version=self.config.version,
        )
