"""Shared pytest fixtures and configuration for the cloud-kv test suite.

Guidelines
----------
* No network access in any test.
* The cloud client is mocked at the core boundary (``MagicMock``) or at
  the ``requests.Session`` level for infra tests.
* The delete confirmation is a plain callable returning a canned answer.
* Tests must not depend on the user's config file or environment.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Point config discovery at an empty temp dir and clear overrides."""
    monkeypatch.setenv("CLOUD_KV_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("CLOUD_KV_URL", raising=False)
    monkeypatch.delenv("CLOUD_KV_TOKEN", raising=False)
