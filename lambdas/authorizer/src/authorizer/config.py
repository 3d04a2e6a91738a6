"""Authorizer configuration dataclasses."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PolicyConfig:
    """Constants rendered into every IAM policy document."""

    version: str = "2012-10-17"
    action: str = "execute-api:Invoke"
    default_principal: str = "subject"
    deny_all_resource: str = "*"


@dataclass(frozen=True)
class AuthorizerConfig:
    """Runtime configuration, normally read from the Lambda environment."""

    region: str = "eu-west-2"
    permissions_bucket: str = ""
    permissions_key: str = "api-permissions.json"
    permissions_file: str = ""
    fetch_timeout_seconds: float = 3.0
    fetch_max_attempts: int = 2
    policy: PolicyConfig = field(default_factory=PolicyConfig)

    @classmethod
    def from_env(cls) -> "AuthorizerConfig":
        """Build config from environment variables, falling back to defaults."""
        defaults = cls()
        policy = PolicyConfig(
            version=os.environ.get("POLICY_VERSION") or defaults.policy.version,
            default_principal=os.environ.get("DEFAULT_PRINCIPAL")
            or defaults.policy.default_principal,
        )
        return cls(
            region=os.environ.get("AWS_REGION") or defaults.region,
            permissions_bucket=os.environ.get("PERMISSIONS_BUCKET", ""),
            permissions_key=os.environ.get("PERMISSIONS_KEY") or defaults.permissions_key,
            permissions_file=os.environ.get("PERMISSIONS_FILE", ""),
            fetch_timeout_seconds=_env_number(
                "PERMISSIONS_FETCH_TIMEOUT", float, defaults.fetch_timeout_seconds
            ),
            fetch_max_attempts=_env_number(
                "PERMISSIONS_FETCH_MAX_ATTEMPTS", int, defaults.fetch_max_attempts
            ),
            policy=policy,
        )


def _env_number(name, convert, default):
    raw = os.environ.get(name, "")
    try:
        value = convert(raw)
    except ValueError:
        return default
    return value if value > 0 else default
