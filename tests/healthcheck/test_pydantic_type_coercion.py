"""
Test pydantic-settings automatic type coercion.
This ensures that environment variables (which are always strings) are properly
converted to the correct Python types as defined in the config models.
"""

import importlib
import sys


def test_pydantic_type_coercion(monkeypatch):
    """
    Test that pydantic-settings automatically coerces environment variable strings
    to the correct types (int, float, bool) as defined in the Pydantic models.
    """
    common_module = sys.modules["common.global_config"]

    # Integer coercion tests
    monkeypatch.setenv("EDITOR__PREVIEW_DEBOUNCE_MS", "150")  # String -> int
    monkeypatch.setenv("EDITOR__MAX_SESSIONS", "12")  # String -> int
    monkeypatch.setenv("EDITOR__NOTIFICATION_DISMISS_SECONDS", "5")  # String -> int

    # Float coercion test
    monkeypatch.setenv("EDITOR__FIT_MARGIN", "0.75")  # String -> float

    # Boolean coercion tests
    monkeypatch.setenv("DATABASE__ECHO", "true")  # String -> bool
    monkeypatch.setenv("LOGGING__VERBOSE", "false")  # String -> bool
    monkeypatch.setenv("LOGGING__FORMAT__SHOW_TIME", "1")  # String '1' -> bool True
    monkeypatch.setenv("LOGGING__LEVELS__DEBUG", "true")  # String -> bool
    monkeypatch.setenv("LOGGING__LEVELS__INFO", "0")  # String '0' -> bool False

    # Reload the config module to pick up the new environment variables
    importlib.reload(common_module)
    config = common_module.global_config

    # Verify integer coercion
    assert isinstance(
        config.editor.preview_debounce_ms, int
    ), "preview_debounce_ms should be int"
    assert config.editor.preview_debounce_ms == 150, "preview_debounce_ms should be 150"
    assert config.preview_debounce_seconds == 0.15, "debounce window should follow the ms value"

    assert isinstance(config.editor.max_sessions, int), "max_sessions should be int"
    assert config.editor.max_sessions == 12, "max_sessions should be 12"

    assert isinstance(
        config.editor.notification_dismiss_seconds, int
    ), "notification_dismiss_seconds should be int"
    assert (
        config.editor.notification_dismiss_seconds == 5
    ), "notification_dismiss_seconds should be 5"

    # Verify float coercion
    assert isinstance(config.editor.fit_margin, float), "fit_margin should be float"
    assert config.editor.fit_margin == 0.75, "fit_margin should be 0.75"

    # Verify boolean coercion
    assert isinstance(config.database.echo, bool), "echo should be bool"
    assert config.database.echo is True, "echo should be True"

    assert isinstance(config.logging.verbose, bool), "verbose should be bool"
    assert config.logging.verbose is False, "verbose should be False"

    assert isinstance(config.logging.format.show_time, bool), "show_time should be bool"
    assert (
        config.logging.format.show_time is True
    ), "show_time should be True (from '1')"

    assert isinstance(config.logging.levels.debug, bool), "debug should be bool"
    assert config.logging.levels.debug is True, "debug should be True"

    assert isinstance(config.logging.levels.info, bool), "info should be bool"
    assert config.logging.levels.info is False, "info should be False (from '0')"

    # Reload the original config to avoid side effects on other tests
    monkeypatch.undo()
    importlib.reload(common_module)
