"""
Client certificate records and their extraction from a Django request.

The TLS handshake happens before Django sees the request. Whatever server or
proxy terminated it hands the client certificate chain over in one of:
  - request.client_cert_chain (records already parsed by a server component)
  - WSGI environ SSL_CLIENT_CERT + SSL_CLIENT_CERT_CHAIN_<n> (mod_ssl style)
  - a URL-escaped PEM header set by a trusted proxy (nginx $ssl_client_escaped_cert)
"""
from datetime import datetime, timezone
from functools import cached_property
from urllib.parse import unquote

from cryptography import x509

LEAF_ENVIRON_KEY = "SSL_CLIENT_CERT"
CHAIN_ENVIRON_PREFIX = "SSL_CLIENT_CERT_CHAIN_"


class CertificateError(ValueError):
    """Certificate data could not be read."""


class CertificateValidityError(CertificateError):
    pass


class CertificateExpiredError(CertificateValidityError):
    pass


class CertificateNotYetValidError(CertificateValidityError):
    pass


class ClientCertificate:
    """
    One certificate of a presented chain.
    The raw PEM/DER data is parsed on first use, so a malformed certificate
    only fails when the gate reads it.
    """

    def __init__(self, data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = data

    @cached_property
    def certificate(self) -> x509.Certificate:
        data = self._data.strip()
        try:
            if data.startswith(b"-----BEGIN"):
                return x509.load_pem_x509_certificate(data)
            return x509.load_der_x509_certificate(data)
        except ValueError as exc:
            raise CertificateError(f"Unreadable client certificate: {exc}") from exc

    @property
    def not_valid_before(self) -> datetime:
        return self.certificate.not_valid_before_utc

    @property
    def not_valid_after(self) -> datetime:
        return self.certificate.not_valid_after_utc

    @property
    def subject_name(self) -> str:
        return self.certificate.subject.rfc4514_string()

    @property
    def issuer_name(self) -> str:
        return self.certificate.issuer.rfc4514_string()

    @property
    def serial_number(self) -> int:
        return self.certificate.serial_number

    def check_validity(self, at=None) -> None:
        """
        Raise CertificateValidityError unless `at` (default: now, UTC) falls
        inside the not-before/not-after window.
        """
        at = at or datetime.now(timezone.utc)
        if at < self.not_valid_before:
            raise CertificateNotYetValidError(
                f"Certificate not valid before {self.not_valid_before.isoformat()}"
            )
        if at > self.not_valid_after:
            raise CertificateExpiredError(
                f"Certificate expired at {self.not_valid_after.isoformat()}"
            )

    def __repr__(self):
        return f"<ClientCertificate {len(self._data)} bytes>"


def extract_chain(request, header=None):
    """
    Return the client certificate chain for this request, leaf first,
    or None when no client certificate was presented.

    `header` is the META key of a proxy-forwarded certificate
    (e.g. "HTTP_X_SSL_CLIENT_CERT"); it is only read when given.
    """
    chain = getattr(request, "client_cert_chain", None)
    if chain is not None:
        return list(chain)

    meta = request.META
    leaf = meta.get(LEAF_ENVIRON_KEY)
    if leaf:
        chain = [ClientCertificate(leaf)]
        index = 0
        while meta.get(f"{CHAIN_ENVIRON_PREFIX}{index}"):
            chain.append(ClientCertificate(meta[f"{CHAIN_ENVIRON_PREFIX}{index}"]))
            index += 1
        return chain

    if header:
        forwarded = meta.get(header)
        if forwarded:
            return [ClientCertificate(unquote(forwarded))]

    return None
