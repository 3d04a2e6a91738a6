"""Deterministic identity fingerprints used as permission lookup keys."""

import hashlib

from .cert_extractor import CertificateIdentity

# Field order and separator must stay fixed, provisioned permission keys depend on them
IDENTITY_SEPARATOR = ":"


def canonical_identity(identity: CertificateIdentity) -> str:
    """Join issuer CN, subject CN and serial as ``issuer:subject:serial``."""
    return IDENTITY_SEPARATOR.join(
        (identity.issuer_cn, identity.subject_cn, identity.serial_number)
    )


def fingerprint_identity(identity: CertificateIdentity) -> str:
    """Return the lowercase hex SHA-256 digest of the canonical identity."""
    return hashlib.sha256(canonical_identity(identity).encode("utf-8")).hexdigest()
