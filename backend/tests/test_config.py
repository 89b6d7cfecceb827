"""Unit tests for settings defaults and parsing."""
from interview_api.config import Settings
from interview_api.services.questions.validator import ValidationPolicy


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.question_count == 10
    assert settings.generation_max_attempts == 3
    assert settings.generation_attempt_timeout_seconds == 15.0
    assert settings.fallback_on_failure is True
    assert settings.exact_tip_count == 3
    assert settings.pre_generation_budget_seconds == 7.5


def test_string_lists_are_parsed():
    settings = Settings(_env_file=None, openai_stop="END,STOP", cors_origins='["https://a.io"]')
    assert settings.openai_stop == ["END", "STOP"]
    assert settings.cors_origins == ["https://a.io"]


def test_unknown_log_level_falls_back_to_info():
    assert Settings(_env_file=None, log_level="verbose").log_level == "INFO"
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_validation_policy_from_settings():
    settings = Settings(_env_file=None, exact_tip_count=None, tip_max_words=12, keep_extra_fields=True)
    policy = ValidationPolicy.from_settings(settings)
    assert policy.exact_tip_count is None
    assert policy.tip_max_words == 12
    assert policy.keep_extra_fields is True
    assert policy.require_tips is True
