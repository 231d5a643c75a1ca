import pytest
from django.test import RequestFactory

from x509auth.views import ClientCertificateView

URL = "/api/x509/certificate"


@pytest.fixture(autouse=True)
def not_enforcing(settings):
    settings.X509_AUTH = {"ENFORCE": False}


def test_no_certificate(client):
    response = client.get(URL)
    assert response.status_code == 404
    assert response.json() == {"detail": "No client certificate presented."}


def test_unreadable_certificate(client):
    response = client.get(URL, SSL_CLIENT_CERT="-----BEGIN CERTIFICATE-----\nAAAA\n-----END CERTIFICATE-----")
    assert response.status_code == 400


def test_certificate_details(client, make_cert):
    leaf = make_cert(subject="CN=Alice,OU=Engineering,O=Acme", issuer="CN=Issuing CA")
    response = client.get(URL, SSL_CLIENT_CERT=leaf, SSL_CLIENT_CERT_CHAIN_0=make_cert(subject="CN=Issuing CA"))

    assert response.status_code == 200
    body = response.json()
    assert body["subject"] == "CN=Alice,OU=Engineering,O=Acme"
    assert body["issuer"] == "CN=Issuing CA"
    assert body["chain_length"] == 2
    assert body["not_valid_before"] < body["not_valid_after"]
    int(body["serial_number"], 16)


class SubjectOnlyRecord:
    subject_name = "CN=Attached,O=Acme"

    def check_validity(self, at=None):
        return None


class NamelessRecord:
    def check_validity(self, at=None):
        return None


def _view_with_chain(chain):
    request = RequestFactory().get(URL)
    request.client_cert_chain = chain
    return ClientCertificateView.as_view()(request)


def test_attached_record_with_only_subject():
    response = _view_with_chain([SubjectOnlyRecord()])
    assert response.status_code == 200
    assert response.data["subject"] == "CN=Attached,O=Acme"
    assert response.data["serial_number"] is None
    assert "issuer" not in response.data
    assert response.data["chain_length"] == 1


def test_attached_record_without_subject():
    response = _view_with_chain([NamelessRecord()])
    assert response.status_code == 400
