"""Identity field extraction from PEM-encoded client certificates."""

from dataclasses import dataclass

from cryptography import x509
from cryptography.x509.oid import NameOID

from .errors import MalformedCertificateError, MissingFieldError


@dataclass(frozen=True)
class CertificateIdentity:
    """Issuer CN, subject CN and serial number of a client certificate."""

    issuer_cn: str
    subject_cn: str
    serial_number: str


def load_certificate(pem: str | bytes) -> x509.Certificate:
    """Parse PEM text or bytes into an X.509 certificate."""
    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    try:
        return x509.load_pem_x509_certificate(data)
    except (ValueError, TypeError) as e:
        raise MalformedCertificateError(f"Unable to parse client certificate: {e}") from e


def format_serial_number(serial: int) -> str:
    """Return the DER INTEGER octets of a serial as uppercase hex (e.g. 01AB)."""
    octets = serial.to_bytes((serial.bit_length() + 8) // 8, "big", signed=True)
    return octets.hex().upper()


def _common_name(name: x509.Name, field_name: str) -> str:
    attributes = name.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attributes:
        raise MissingFieldError(field_name)
    value = attributes[0].value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    value = value.strip()
    if not value:
        raise MissingFieldError(field_name)
    return value


def extract_identity(pem: str | bytes) -> CertificateIdentity:
    """Extract trimmed issuer CN, subject CN and serial number.

    Raises:
        MalformedCertificateError: If the PEM cannot be parsed
        MissingFieldError: If issuer CN, subject CN or serial is absent or blank
    """
    cert = load_certificate(pem)

    try:
        issuer, subject = cert.issuer, cert.subject
        serial = cert.serial_number
    except ValueError as e:
        raise MalformedCertificateError(f"Unable to decode certificate fields: {e}") from e

    issuer_cn = _common_name(issuer, "issuerCN")
    subject_cn = _common_name(subject, "subjectCN")

    serial_number = format_serial_number(serial).strip()
    if not serial_number:
        raise MissingFieldError("serialNumber")

    return CertificateIdentity(
        issuer_cn=issuer_cn,
        subject_cn=subject_cn,
        serial_number=serial_number,
    )
