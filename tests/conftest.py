"""
Global pytest configuration for this repo.

Resets the process-wide active config between tests so one test's overrides never
leak into another.
"""

from __future__ import annotations

import pytest

from stepcalc.common import config as config_module


@pytest.fixture(autouse=True)
def _reset_active_config():
    config_module._active_config = None
    try:
        yield
    finally:
        config_module._active_config = None
