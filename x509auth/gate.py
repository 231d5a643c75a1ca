"""
X509 client certificate gate.

The gate is configured once at startup from an enforcement policy provider
and two options:
  - cert-contains : a string the client certificate subject DN must contain
  - paths         : comma delimited URI path prefixes to enforce, given
                    without the application mount path (for /app/reports pass
                    /reports and mount path /app)

When enforcing, a request on an enforced path must carry a client certificate
(i.e. the TLS handshake included client authentication) that is inside its
validity period and, if cert-contains is set, whose subject contains it.
Every other request on an enforced path is rejected with 403.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from django.core.exceptions import ImproperlyConfigured

from .certificates import CertificateValidityError
from .policy import resolve_enforce

_LOG = logging.getLogger(__name__)

FAILURE_STATUS = 403
FAILURE_MESSAGE = "X509 Authentication failure"


class FatalInitError(ImproperlyConfigured):
    """Gate configuration could not be resolved; the gate must not start."""


class GateStateError(RuntimeError):
    pass


class GateState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    SHUT_DOWN = "shut_down"


class Outcome(enum.Enum):
    FORWARD = "forward"
    REJECT = "reject"


@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    status: Optional[int] = None
    message: Optional[str] = None

    @property
    def forwarded(self) -> bool:
        return self.outcome is Outcome.FORWARD


FORWARD = Decision(Outcome.FORWARD)
REJECT = Decision(Outcome.REJECT, FAILURE_STATUS, FAILURE_MESSAGE)


@dataclass(frozen=True)
class GateConfig:
    enforce: bool
    cert_contains: Optional[str] = None
    enforced_paths: Optional[Tuple[str, ...]] = None


def _split_paths(raw_path_list, path_prefix):
    if isinstance(raw_path_list, str):
        raw_path_list = raw_path_list.split(",")
    return tuple(path_prefix + entry.strip() for entry in raw_path_list)


def initialize(policy_provider, raw_cert_contains=None, raw_path_list=None, path_prefix="") -> GateConfig:
    """
    Resolve the gate configuration. Nothing but the policy provider is read
    when enforcement is off. Any failure raises FatalInitError.
    """
    try:
        _LOG.debug("Initializing X509 gate")
        enforce = resolve_enforce(policy_provider)
        _LOG.info("Enforcing X509 authentication: %s", enforce)
        if not enforce:
            return GateConfig(enforce=False)

        cert_contains = raw_cert_contains
        _LOG.debug("Cert must contain: %s", cert_contains)

        enforced_paths = None
        if raw_path_list is not None:
            enforced_paths = _split_paths(raw_path_list, path_prefix or "")
            for path in enforced_paths:
                _LOG.debug("Enforcing path: %s", path)

        return GateConfig(enforce=True, cert_contains=cert_contains, enforced_paths=enforced_paths)
    except Exception as exc:
        raise FatalInitError(f"X509 gate initialization failed: {exc}") from exc


def path_in_scope(path: str, config: GateConfig) -> bool:
    if config.enforced_paths is None:
        return True
    for prefix in config.enforced_paths:
        if path.startswith(prefix):
            _LOG.debug("Path %s matched %s", path, prefix)
            return True
    return False


def validate_certificate(chain, config: GateConfig, at=None) -> bool:
    """
    Only the leaf (first) certificate is checked: validity window against the
    current time, then the subject substring when one is configured.
    """
    if not chain:
        _LOG.info("X509 rejected: no client certificate presented")
        return False

    leaf = chain[0]
    try:
        leaf.check_validity(at)
    except CertificateValidityError as exc:
        _LOG.info("X509 rejected: %s", exc)
        return False
    except Exception as exc:
        _LOG.warning("X509 rejected: unreadable client certificate: %s", exc)
        return False

    if config.cert_contains is None:
        return True

    try:
        name = leaf.subject_name
    except Exception as exc:
        _LOG.warning("X509 rejected: unreadable certificate subject: %s", exc)
        return False

    if config.cert_contains in name:
        _LOG.debug("Cert %s contains %s", name, config.cert_contains)
        return True

    _LOG.info("X509 rejected: cert %s does not contain %s", name, config.cert_contains)
    return False


class CertificateAuthGate:
    """
    Holds one immutable GateConfig and decides Forward/Reject per request.
    `evaluate` keeps no state between calls and is safe to call concurrently.
    """

    def __init__(self, config: Optional[GateConfig] = None):
        self._config = config
        self.state = GateState.READY if config is not None else GateState.UNINITIALIZED

    @classmethod
    def create(cls, policy_provider, raw_cert_contains=None, raw_path_list=None, path_prefix=""):
        gate = cls()
        gate.initialize(policy_provider, raw_cert_contains, raw_path_list, path_prefix)
        return gate

    @property
    def config(self) -> Optional[GateConfig]:
        return self._config

    def initialize(self, policy_provider, raw_cert_contains=None, raw_path_list=None, path_prefix=""):
        if self.state is not GateState.UNINITIALIZED:
            raise GateStateError(f"Gate already initialized (state: {self.state.value})")
        self._config = initialize(policy_provider, raw_cert_contains, raw_path_list, path_prefix)
        self.state = GateState.READY
        return self._config

    def evaluate(self, path: str, chain=None) -> Decision:
        if self.state is not GateState.READY:
            raise GateStateError(f"Gate cannot evaluate requests (state: {self.state.value})")

        config = self._config
        if not config.enforce:
            return FORWARD

        if not path_in_scope(path, config):
            return FORWARD

        _LOG.debug("Enforcing X509 on %s", path)
        if validate_certificate(chain, config):
            _LOG.debug("Cert is valid")
            return FORWARD
        return REJECT

    def close(self):
        self.state = GateState.SHUT_DOWN

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
