"""Unit test fixtures.

Most helpers live in tests/conftest.py; this file adds the patching
helpers the command tests share.
"""

import pytest

from launchdeck.api.item.Engine import Engine
from tests.conftest import FakeRunner, loaded_service, run_cmd, write_definition

__all__ = [
    "FakeRunner",
    "loaded_service",
    "patch_engine",
    "run_cmd",
    "write_definition",
]


@pytest.fixture
def patch_engine(monkeypatch, engine: Engine) -> Engine:
    """Make the item commands use the test engine instead of the on-disk configuration."""
    from launchdeck.api.item import _build_engine as build_module

    monkeypatch.setattr(build_module, "_build_engine", lambda: engine)
    return engine
