from django.apps import AppConfig


class X509AuthConfig(AppConfig):
    name = "x509auth"
    verbose_name = "X509 client certificate authentication"

    def ready(self):
        from . import checks  # noqa: F401
