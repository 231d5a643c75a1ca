import logging

from django.http import HttpResponseForbidden
from django.utils.deprecation import MiddlewareMixin

from x509auth.certificates import extract_chain
from x509auth.conf import build_gate, get_x509_conf

_LOG = logging.getLogger(__name__)


class X509AuthMiddleware(MiddlewareMixin):
    """
    Enforces X509 client certificate authentication ahead of the views.

    The certificate is only present when the TLS handshake included client
    authentication; the handshake itself belongs to the server or the
    TLS-terminating proxy (e.g., Nginx). Configuration comes from
    settings.X509_AUTH and is resolved once, when Django loads the
    middleware; a resolution failure stops the handler from loading.

    Rejected requests get a 403 with a fixed message. The reason is only
    logged.
    """

    def __init__(self, get_response):
        super().__init__(get_response)
        conf = get_x509_conf()
        self.cert_header = conf["CERT_HEADER"]
        self.gate = build_gate(conf)

    def process_request(self, request):
        chain = extract_chain(request, header=self.cert_header)
        decision = self.gate.evaluate(request.path, chain)
        if decision.forwarded:
            return None

        _LOG.debug("Rejecting %s %s", request.method, request.path)
        return HttpResponseForbidden(decision.message)
