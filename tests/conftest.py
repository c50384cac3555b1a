# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Phone fixtures use libphonenumber's own example numbers so classification
does not drift between metadata releases:
- AU mobile      +61 412 345 678   (MOBILE)
- AU fixed line  +61 2 1234 5678   (FIXED_LINE)
- US             +1 650-253-0000   (FIXED_LINE_OR_MOBILE)
"""

import os
from collections.abc import Callable
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from fieldcheck.contracts.fields import StringField

AU_MOBILE = "+61 412 345 678"
AU_MOBILE_E164 = "+61412345678"
AU_FIXED = "+61 2 1234 5678"
AU_FIXED_E164 = "+61212345678"
US_NUMBER = "+1 650-253-0000"


@pytest.fixture
def make_phone_field() -> Callable[..., StringField]:
    """Factory for mobilePhone string descriptors with camelCase overrides."""

    def _make(name: str = "phone", value: Any = AU_MOBILE, **overrides: Any) -> StringField:
        payload: dict[str, Any] = {
            "name": name,
            "validationType": "string",
            "stringFormat": "mobilePhone",
            "stringData": value,
        }
        payload.update(overrides)
        return StringField.from_dict(payload)

    return _make


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
