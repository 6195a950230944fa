from __future__ import annotations

import os

from pytest import MonkeyPatch

from baseline_check.constants import DEBUG_ENV_VAR
from baseline_check.util.debug import debug_enabled, debug_mode


def test_debug_mode_sets_and_clears_flag(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)

    with debug_mode(True):
        assert debug_enabled() is True

    assert DEBUG_ENV_VAR not in os.environ
    assert debug_enabled() is False


def test_debug_mode_restores_previous_value_after_error(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv(DEBUG_ENV_VAR, "0")

    try:
        with debug_mode(True):
            assert debug_enabled() is True
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert os.environ[DEBUG_ENV_VAR] == "0"


def test_debug_mode_disabled_leaves_environment_alone(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv(DEBUG_ENV_VAR, "1")

    with debug_mode(False):
        assert debug_enabled() is True

    assert os.environ[DEBUG_ENV_VAR] == "1"
