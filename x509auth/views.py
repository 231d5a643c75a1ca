from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .certificates import CertificateError, extract_chain
from .conf import get_x509_conf
from .serializers import ClientCertificateSerializer


# -------------------------------------------
# CLIENT CERTIFICATE (diagnostics)
# -------------------------------------------
class ClientCertificateView(APIView):
    """
    Shows the leaf certificate the caller presented.
    Sits behind X509AuthMiddleware like every other view, so with enforcement
    on it only answers callers whose certificate was accepted.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        chain = extract_chain(request, header=get_x509_conf()["CERT_HEADER"])
        if not chain:
            return Response(
                {"detail": "No client certificate presented."},
                status=status.HTTP_404_NOT_FOUND,
            )

        try:
            data = dict(ClientCertificateSerializer(chain[0]).data)
        except (CertificateError, AttributeError):
            return Response(
                {"detail": "Client certificate could not be read."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data["chain_length"] = len(chain)
        return Response(data)
