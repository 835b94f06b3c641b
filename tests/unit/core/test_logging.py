"""Tests for the logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
import structlog
from structlog.testing import capture_logs

from battle_core.core.config import Settings, get_settings
from battle_core.core.logging import (
    AppContext,
    bind_context,
    build_processors,
    clear_context,
    configure_logging,
    get_logger,
    render_domain_values,
    resolve_log_level,
)
from battle_core.models.enums import Element, Winner


class TestLogLevel:
    """Tests for level resolution."""

    def test_from_settings(self) -> None:
        assert resolve_log_level(Settings(debug=False, log_level="ERROR")) == logging.ERROR
        assert resolve_log_level(Settings(debug=False, log_level="INFO")) == logging.INFO

    def test_debug_mode_forces_debug(self) -> None:
        assert resolve_log_level(Settings(debug=True, log_level="ERROR")) == logging.DEBUG

    def test_from_environment(self, mock_env_vars: dict[str, str]) -> None:
        assert resolve_log_level(get_settings()) == logging.DEBUG


class TestProcessors:
    """Tests for the processor chain."""

    @pytest.mark.parametrize(
        ("json_logs", "renderer"),
        [
            (True, structlog.processors.JSONRenderer),
            (False, structlog.dev.ConsoleRenderer),
        ],
    )
    def test_renderer_follows_settings(self, json_logs: bool, renderer: type) -> None:
        processors = build_processors(Settings(json_logs=json_logs))

        assert isinstance(processors[-1], renderer)

    def test_app_context(self) -> None:
        stamp = AppContext("Battle Core", "0.1.0")

        event = stamp(None, "info", {"event": "battle:start"})

        assert event == {"event": "battle:start", "app": "Battle Core", "version": "0.1.0"}

    def test_render_domain_values(self, make_unit: Any) -> None:
        event = render_domain_values(
            None,
            "info",
            {
                "event": "battle:end",
                "winner": Winner.PLAYER,
                "elements": (Element.MARS, Element.MOON),
                "unit": make_unit("hero"),
                "turns": 4,
            },
        )

        assert event["winner"] == "player"
        assert event["elements"] == ["Mars", "Moon"]
        assert event["unit"]["id"] == "hero"
        assert event["unit"]["currentHp"] == 100
        assert event["turns"] == 4


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_filters_records(self, restore_logging: None) -> None:
        configure_logging(Settings(debug=False, log_level="WARNING"))
        logger = get_logger("battle_core.tests")

        with capture_logs() as records:
            logger.info("Choice generated")
            logger.warning("Save version mismatch")

        assert [record["event"] for record in records] == ["Save version mismatch"]
        assert logging.getLogger().level == logging.WARNING

    def test_environment_debug(
        self, mock_env_vars: dict[str, str], restore_logging: None
    ) -> None:
        configure_logging()
        logger = get_logger("battle_core.tests")

        with capture_logs() as records:
            logger.debug("Candidate rejected")

        assert [record["event"] for record in records] == ["Candidate rejected"]

    def test_log_file(self, tmp_path: Path, restore_logging: None) -> None:
        log_file = tmp_path / "battle.log"
        configure_logging(Settings(debug=False, log_level="INFO", log_file=str(log_file)))

        logging.getLogger("battle_core.tests").warning("Save written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "Save written" in log_file.read_text(encoding="utf-8")


class TestContext:
    """Tests for bound log context."""

    def test_bind_and_clear(self) -> None:
        bind_context(run_seed=12345)
        bind_context(battle_index=2)

        assert structlog.contextvars.get_contextvars() == {"run_seed": 12345, "battle_index": 2}

        clear_context()

        assert structlog.contextvars.get_contextvars() == {}
