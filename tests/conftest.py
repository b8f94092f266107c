# tests/conftest.py
from __future__ import annotations

"""
Pytest configuration for the astrocal suite.

- Registers Hypothesis profiles for local dev and CI.
- Exposes the repo's default YAML config path and a Flask test client.
- Sanity-checks ERFA availability for the Gregorian cross-checks and
  that the IANA zones used by the clock tests resolve.
- Adds a 'slow' marker for the exhaustive day-count sweeps.
"""

import os
from pathlib import Path

import pytest
from hypothesis import settings, HealthCheck


# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(
        deadline=None,           # avoid flaky timeouts on slower runners
        max_examples=200,        # arithmetic is cheap; keep local runs fast anyway
        suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=1000,
        suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = REPO_ROOT / "config" / "defaults.yaml"


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "slow: mark test as slow")


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


# ──────────────────────────────────────────────────────────────────────────────
# Global fixtures
# ──────────────────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_astrocal_env(monkeypatch):
    """Keep host overrides from leaking into tests."""
    for key in ("ASTROCAL_CONFIG", "ASTROCAL_REFORM", "ASTROCAL_RULES_JSON"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(scope="session")
def default_config_path() -> str:
    return str(DEFAULT_CONFIG)


@pytest.fixture(scope="session")
def ensure_erfa():
    """
    Fail early if ERFA/pyERFA isn't importable or missing key functions.
    """
    import erfa  # pyERFA exposes the ERFA namespace as 'erfa'
    assert hasattr(erfa, "cal2jd"), "ERFA.cal2jd not available"
    assert hasattr(erfa, "jd2cal"), "ERFA.jd2cal not available"
    return erfa


@pytest.fixture()
def app(default_config_path):
    from astrocal.main import create_app
    from astrocal.utils.config import load_config

    flask_app = create_app(load_config(default_config_path))
    flask_app.testing = True
    return flask_app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture(scope="session")
def ensure_tzdata():
    """Sanity-check that the IANA zones used by the clock tests resolve."""
    from zoneinfo import ZoneInfo
    for name in ("UTC", "Asia/Kolkata", "America/New_York"):
        ZoneInfo(name)
