import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec


@pytest.fixture(scope="session")
def signing_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def make_cert(signing_key):
    """
    Returns a factory producing a self-signed PEM certificate.
    Validity offsets are relative to now.
    """

    def _make(
        subject="CN=Alice,OU=Engineering,O=Acme",
        issuer="CN=Test CA,O=Acme",
        not_before=datetime.timedelta(days=-1),
        not_after=datetime.timedelta(days=30),
    ):
        now = datetime.datetime.now(datetime.timezone.utc)
        cert = (
            x509.CertificateBuilder()
            .subject_name(x509.Name.from_rfc4514_string(subject))
            .issuer_name(x509.Name.from_rfc4514_string(issuer))
            .public_key(signing_key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now + not_before)
            .not_valid_after(now + not_after)
            .sign(signing_key, hashes.SHA256())
        )
        return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")

    return _make


@pytest.fixture
def expired_cert(make_cert):
    return make_cert(
        not_before=datetime.timedelta(days=-30),
        not_after=datetime.timedelta(days=-1),
    )


@pytest.fixture
def future_cert(make_cert):
    return make_cert(
        not_before=datetime.timedelta(days=1),
        not_after=datetime.timedelta(days=30),
    )
