from django.core import checks
from django.utils.module_loading import import_string

from .conf import get_x509_conf
from .gate import FatalInitError


@checks.register()
def check_x509_settings(app_configs, **kwargs):
    """
    Static sanity checks on X509_AUTH. The enforcement policy is imported
    but never asked for its value here.
    """
    try:
        conf = get_x509_conf()
    except FatalInitError as exc:
        return [checks.Error(str(exc), id="x509auth.E002")]
    errors = []

    policy = conf["ENFORCE_POLICY"]
    if isinstance(policy, str):
        try:
            import_string(policy)
        except ImportError as exc:
            errors.append(checks.Error(
                f"X509_AUTH['ENFORCE_POLICY'] cannot be imported: {exc}",
                id="x509auth.E001",
            ))

    paths = conf["PATHS"]
    if isinstance(paths, str):
        paths = paths.split(",")
    if paths is not None and not (
        isinstance(paths, (list, tuple)) and all(isinstance(entry, str) for entry in paths)
    ):
        errors.append(checks.Warning(
            f"X509_AUTH['PATHS'] must be a comma delimited string or a list of strings, got {paths!r}",
            id="x509auth.W003",
        ))
        paths = None
    for entry in paths or ():
        if not entry.strip().startswith("/"):
            errors.append(checks.Warning(
                f"X509_AUTH['PATHS'] entry {entry.strip()!r} does not start with '/'",
                hint="Paths are matched as prefixes of the request path after the mount path.",
                id="x509auth.W001",
            ))

    header = conf["CERT_HEADER"]
    if header and not header.startswith("HTTP_"):
        errors.append(checks.Warning(
            f"X509_AUTH['CERT_HEADER'] {header!r} is not a request.META header key",
            hint="Use the META form, e.g. HTTP_X_SSL_CLIENT_CERT.",
            id="x509auth.W002",
        ))

    return errors
