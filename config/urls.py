from django.urls import include, path

urlpatterns = [
    path("api/x509/", include("x509auth.urls")),
]
