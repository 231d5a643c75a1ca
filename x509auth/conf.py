from collections.abc import Mapping

from django.conf import settings
from django.utils.module_loading import import_string

from .gate import CertificateAuthGate, FatalInitError

DEFAULTS = {
    "ENFORCE_POLICY": "x509auth.policy.SettingsEnforcementPolicy",
    "ENFORCE": False,
    "CERT_CONTAINS": None,
    "PATHS": None,
    "CONTEXT_PATH": None,
    "CERT_HEADER": None,
}


def get_x509_conf() -> dict:
    overrides = getattr(settings, "X509_AUTH", None) or {}
    if not isinstance(overrides, Mapping):
        raise FatalInitError(f"X509_AUTH must be a mapping, got {type(overrides).__name__}")
    conf = dict(DEFAULTS)
    conf.update(overrides)
    if conf["CONTEXT_PATH"] is None:
        conf["CONTEXT_PATH"] = getattr(settings, "FORCE_SCRIPT_NAME", None) or ""
    return conf


def load_policy_provider(policy):
    """
    ENFORCE_POLICY is a dotted path to a provider class or a callable;
    classes are instantiated without arguments.
    """
    if isinstance(policy, str):
        try:
            policy = import_string(policy)
        except ImportError as exc:
            raise FatalInitError(f"Cannot import X509 enforcement policy {policy!r}: {exc}") from exc
    if isinstance(policy, type):
        try:
            policy = policy()
        except Exception as exc:
            raise FatalInitError(f"Cannot create X509 enforcement policy {policy!r}: {exc}") from exc
    return policy


def build_gate(conf=None) -> CertificateAuthGate:
    """Build a READY gate from X509_AUTH settings. Raises FatalInitError."""
    conf = conf or get_x509_conf()
    provider = load_policy_provider(conf["ENFORCE_POLICY"])
    return CertificateAuthGate.create(
        provider,
        raw_cert_contains=conf["CERT_CONTAINS"],
        raw_path_list=conf["PATHS"],
        path_prefix=conf["CONTEXT_PATH"],
    )
