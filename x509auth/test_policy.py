import pytest

from x509auth.policy import (
    EnvironmentEnforcementPolicy,
    PolicyResolutionError,
    SettingsEnforcementPolicy,
    StaticEnforcementPolicy,
    parse_flag,
    resolve_enforce,
)


@pytest.mark.parametrize("value", [True, "1", "true", "YES", " on "])
def test_truthy_flags(value):
    assert parse_flag(value) is True


@pytest.mark.parametrize("value", [False, "0", "false", "No", "off", ""])
def test_falsy_flags(value):
    assert parse_flag(value) is False


@pytest.mark.parametrize("value", ["maybe", None, 2])
def test_unrecognized_flag(value):
    with pytest.raises(PolicyResolutionError):
        parse_flag(value)


def test_settings_policy(settings):
    settings.X509_AUTH = {"ENFORCE": "true"}
    assert SettingsEnforcementPolicy().check_enforce() is True

    settings.X509_AUTH = {}
    assert SettingsEnforcementPolicy().check_enforce() is False


def test_environment_policy(monkeypatch):
    monkeypatch.delenv("X509_ENFORCE", raising=False)
    assert EnvironmentEnforcementPolicy().check_enforce() is False
    assert EnvironmentEnforcementPolicy(default=True).check_enforce() is True

    monkeypatch.setenv("X509_ENFORCE", "1")
    assert EnvironmentEnforcementPolicy().check_enforce() is True

    monkeypatch.setenv("X509_ENFORCE", "sometimes")
    with pytest.raises(PolicyResolutionError):
        EnvironmentEnforcementPolicy().check_enforce()


def test_resolve_enforce_with_strategy_or_callable():
    assert resolve_enforce(StaticEnforcementPolicy(True)) is True
    assert resolve_enforce(lambda: "0") is False


def test_resolve_enforce_rejects_non_provider():
    with pytest.raises(PolicyResolutionError):
        resolve_enforce("yes")
