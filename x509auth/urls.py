from django.urls import path
from .views import ClientCertificateView

urlpatterns = [
    path("certificate", ClientCertificateView.as_view(), name="client_certificate"),
]
