"""Authorization engine: certificate -> fingerprint -> permissions -> policy.

Each stage runs through ``attempt`` and yields an ``Ok`` or ``Err``. The
final result is folded once in ``_conclude``: any ``Err`` becomes a deny-all
decision, so ``authorize`` never raises and never allows on error.
"""

from ._types import APIGatewayAuthorizerEvent
from .cert_extractor import CertificateIdentity, extract_identity
from .errors import NoCertificatePresentedError
from .event_parser import extract_client_cert_pem
from .fingerprint import canonical_identity, fingerprint_identity
from .logging_config import LOGGER
from .permission_store import PermissionStore
from .permissions import PermissionEntry, resolve_permissions
from .responses import AuthorizationDecision, PolicyRenderer
from .result import Err, Ok, Result, attempt


def require_client_cert(event: APIGatewayAuthorizerEvent | None) -> str:
    """Return the client certificate PEM or raise NoCertificatePresentedError."""
    pem = extract_client_cert_pem(event)
    if pem is None:
        raise NoCertificatePresentedError("Client certificate is not present in the request")
    return pem


class AuthorizationEngine:
    """Orchestrates the authorization stages for a single request.

    Holds no per-request state, so one instance can serve concurrent requests.
    """

    def __init__(self, store: PermissionStore, renderer: PolicyRenderer | None = None) -> None:
        self.store = store
        self.renderer = renderer or PolicyRenderer()

    def _resolve(self, fingerprint: str) -> tuple[PermissionEntry, ...]:
        return resolve_permissions(fingerprint, self.store.fetch_permission_set())

    def authorize(self, event: APIGatewayAuthorizerEvent | None) -> AuthorizationDecision:
        """Return the authorization decision for a gateway request."""
        identity: Result[CertificateIdentity] = attempt(
            "parse_event", require_client_cert, event
        ).then("extract", extract_identity)

        principal = None
        if isinstance(identity, Ok):
            principal = identity.value.subject_cn
            LOGGER.debug(
                "Canonical identity derived",
                extra={"canonicalIdentity": canonical_identity(identity.value)},
            )

        fingerprint = identity.then("fingerprint", fingerprint_identity)
        permissions = fingerprint.then("resolve", self._resolve)
        decision = permissions.then(
            "render", lambda entries: self.renderer.render(principal, entries)
        )
        return self._conclude(decision, principal, fingerprint, permissions)

    def _conclude(
        self,
        decision: Result[AuthorizationDecision],
        principal: str | None,
        fingerprint: Result[str],
        permissions: Result[tuple[PermissionEntry, ...]],
    ) -> AuthorizationDecision:
        audit = {
            "principalId": principal or self.renderer.config.default_principal,
            "fingerprint": fingerprint.value if isinstance(fingerprint, Ok) else None,
        }

        if isinstance(decision, Err):
            LOGGER.warning(
                "Authorization denied: %s",
                decision.error,
                extra={
                    **audit,
                    "outcome": "denied",
                    "reason": decision.error.reason,
                    "stage": decision.stage,
                },
            )
            return self.renderer.deny_all(principal)

        if isinstance(permissions, Ok) and not permissions.value:
            LOGGER.warning(
                "No permissions found for client certificate",
                extra={**audit, "outcome": "denied", "reason": "no_matching_permissions"},
            )
        else:
            LOGGER.info(
                "Permissions resolved for client certificate",
                extra={
                    **audit,
                    "outcome": "resolved",
                    "statementCount": len(decision.value.statements),
                },
            )
        return decision.value
