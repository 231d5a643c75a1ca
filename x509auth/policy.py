# x509auth/policy.py
"""
Enforcement policy providers.

A provider answers one question, once, at gate startup: is X509
authentication enforced? Anything with a `check_enforce()` method, or a plain
callable returning bool, can be used.
"""
import os

from django.conf import settings

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off", "")


class PolicyResolutionError(Exception):
    """The enforcement flag could not be determined."""


def parse_flag(value, source="value") -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
    raise PolicyResolutionError(f"Unrecognized enforcement flag in {source}: {value!r}")


def resolve_enforce(provider) -> bool:
    """Ask `provider` (strategy object or callable) for the enforcement flag."""
    check = getattr(provider, "check_enforce", None)
    if check is None:
        if not callable(provider):
            raise PolicyResolutionError(f"{provider!r} is not an enforcement policy provider")
        check = provider
    return parse_flag(check(), source=repr(provider))


class StaticEnforcementPolicy:
    def __init__(self, enforce: bool):
        self.enforce = enforce

    def check_enforce(self) -> bool:
        return self.enforce

    def __repr__(self):
        return f"StaticEnforcementPolicy({self.enforce!r})"


class SettingsEnforcementPolicy:
    """
    Reads settings.X509_AUTH["ENFORCE"].
    A missing X509_AUTH setting or ENFORCE key means "not enforced".
    """

    def check_enforce(self) -> bool:
        conf = getattr(settings, "X509_AUTH", None) or {}
        return parse_flag(conf.get("ENFORCE", False), source='X509_AUTH["ENFORCE"]')


class EnvironmentEnforcementPolicy:
    """
    Reads the enforcement flag straight from the process environment, so it
    can be toggled per deployment without touching settings.
    """

    def __init__(self, var="X509_ENFORCE", default=False):
        self.var = var
        self.default = default

    def check_enforce(self) -> bool:
        value = os.environ.get(self.var)
        if value is None:
            return self.default
        return parse_flag(value, source=f"${self.var}")
