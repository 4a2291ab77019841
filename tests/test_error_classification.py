import pytest

from api.features.chat.exceptions import (
    AuthError,
    GenerationError,
    RateLimitError,
    SafetyBlockedError,
)
from api.features.chat.generator import (
    GENERATION_ERROR_PATTERNS,
    classify_generation_error,
)


@pytest.mark.parametrize(
    "provider_message, expected",
    [
        ("Incorrect API key provided: sk-abc", AuthError),
        ("API_KEY_INVALID", AuthError),
        ("request failed authentication", AuthError),
        ("Error code: 401 - {'code': 'invalid_api_key'}", AuthError),
        ("You exceeded your current quota", RateLimitError),
        ("rate limit reached for requests", RateLimitError),
        ("Rate limit reached for gpt-4o-mini", RateLimitError),
        ("429 RESOURCE_EXHAUSTED", RateLimitError),
        ("{'code': 'rate_limit_exceeded'}", RateLimitError),
        ("Response was blocked due to safety", SafetyBlockedError),
        ("finish_reason: SAFETY", SafetyBlockedError),
        ("finish_reason: content_filter", SafetyBlockedError),
        ("Connection reset by peer", GenerationError),
        ("Internal server error", GenerationError),
    ],
)
def test_classification_table(provider_message, expected):
    classified = classify_generation_error(RuntimeError(provider_message))

    assert type(classified) is expected
    assert classified.details["provider_error"] == "RuntimeError"


@pytest.mark.parametrize("provider_message", ["Authentication failed", "RATE LIMIT", "Safety"])
def test_matching_is_case_sensitive(provider_message):
    assert isinstance(
        classify_generation_error(RuntimeError(provider_message)), GenerationError
    )


def test_first_matching_kind_wins():
    # Mentions both a key problem and a quota; auth is checked first
    classified = classify_generation_error(
        RuntimeError("API key has no quota assigned")
    )

    assert isinstance(classified, AuthError)


def test_message_less_failure_uses_type_name():
    classified = classify_generation_error(TimeoutError())

    assert isinstance(classified, GenerationError)
    assert "TimeoutError" in classified.message


def test_every_kind_has_patterns():
    kinds = [kind for kind, patterns in GENERATION_ERROR_PATTERNS if patterns]

    assert kinds == [AuthError, RateLimitError, SafetyBlockedError]
