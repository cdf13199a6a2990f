from types import SimpleNamespace

import pytest

from payroll_system.config import RuleSettings, get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "payroll_system.config.production"),
        ("prod", "payroll_system.config.production"),
        ("testing", "payroll_system.config.testing"),
        ("anything", "payroll_system.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_rule_settings_defaults():
    rules = RuleSettings()
    assert rules.daily_overtime_cap_millis == 3 * 60 * 60 * 1000
    assert rules.days_per_month_prorate == 22
    assert rules.max_working_millis_per_day == 8 * 60 * 60 * 1000


def test_rule_settings_from_settings_module():
    settings = SimpleNamespace(PAYROLL_DAYS_PER_MONTH_PRORATE="20")
    rules = RuleSettings.from_settings(settings)
    assert rules.days_per_month_prorate == 20
    assert rules.max_working_millis_per_day == 8 * 60 * 60 * 1000


def test_rule_settings_reject_non_positive_values():
    with pytest.raises(ValueError):
        RuleSettings(days_per_month_prorate=0)
