"""Permission entries and fingerprint resolution."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .errors import InvalidPermissionEntryError


class Effect(StrEnum):
    ALLOW = "Allow"
    DENY = "Deny"


REQUIRED_FIELDS = ("api", "resource", "stage", "method", "effect")


@dataclass(frozen=True)
class PermissionEntry:
    """One operation a partner may (or may not) invoke."""

    api: str
    resource: str
    stage: str
    method: str
    effect: Effect

    def __post_init__(self) -> None:
        try:
            effect = Effect(self.effect)
        except ValueError as e:
            raise InvalidPermissionEntryError(
                f"Permission effect must be Allow or Deny, got '{self.effect}'"
            ) from e
        object.__setattr__(self, "effect", effect)

    @property
    def resource_arn(self) -> str:
        """Resource in ``api/stage/method/resource`` form."""
        return "/".join((self.api, self.stage, self.method, self.resource))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PermissionEntry":
        """Parse a raw permission record.

        Raises:
            InvalidPermissionEntryError: If a field is missing, not a string,
                or the effect is neither Allow nor Deny
        """
        if not isinstance(record, Mapping):
            raise InvalidPermissionEntryError(f"Permission entry must be an object, got {record!r}")

        missing = [name for name in REQUIRED_FIELDS if not isinstance(record.get(name), str)]
        if missing:
            raise InvalidPermissionEntryError(f"Permission entry missing fields: {missing}")

        return cls(
            api=record["api"],
            resource=record["resource"],
            stage=record["stage"],
            method=record["method"],
            effect=record["effect"],
        )


PermissionSet = Mapping[str, tuple[PermissionEntry, ...]]


def parse_permission_set(document: Any) -> dict[str, tuple[PermissionEntry, ...]]:
    """Validate a permissions document mapping fingerprints to entry lists.

    Raises:
        InvalidPermissionEntryError: If the document shape or any entry is invalid
    """
    if not isinstance(document, Mapping):
        raise InvalidPermissionEntryError("Permissions document must be a JSON object")

    permission_set: dict[str, tuple[PermissionEntry, ...]] = {}
    for fingerprint, records in document.items():
        if not isinstance(fingerprint, str) or not isinstance(records, list):
            raise InvalidPermissionEntryError(
                f"Permissions for '{fingerprint}' must be a list of entries",
                fingerprint=fingerprint if isinstance(fingerprint, str) else None,
            )
        try:
            permission_set[fingerprint] = tuple(
                record if isinstance(record, PermissionEntry) else PermissionEntry.from_record(record)
                for record in records
            )
        except InvalidPermissionEntryError as e:
            raise InvalidPermissionEntryError(
                f"Invalid permissions for '{fingerprint}': {e}", fingerprint=fingerprint
            ) from e
    return permission_set


def resolve_permissions(
    fingerprint: str, permission_set: PermissionSet
) -> tuple[PermissionEntry, ...]:
    """Look up a fingerprint. An unknown fingerprint yields an empty tuple."""
    return tuple(permission_set.get(fingerprint, ()))
