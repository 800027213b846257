"""Tests for the terminal front end."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from rich.panel import Panel
from rich.table import Table
from typer.testing import CliRunner

from chat_assistant.cli import app, handle_command, render_message, render_params
from chat_assistant.config import Settings
from chat_assistant.models.messages import Role
from chat_assistant.utils.exceptions import TransportError

runner = CliRunner()


class TestHandleCommand:

    def test_quit(self, controller):
        assert handle_command(controller, "/quit") is False
        assert handle_command(controller, "/exit") is False

    def test_set_updates_params(self, controller, store):
        assert handle_command(controller, "/set top_p 0.9") is True
        assert handle_command(controller, "/set top_k 10") is True
        assert store.params.top_p is None
        assert store.params.top_k == 10

    def test_unset(self, controller, store):
        handle_command(controller, "/unset temperature")
        assert store.params.temperature is None

    def test_set_bad_value_keeps_params(self, controller, store):
        before = store.params
        assert handle_command(controller, "/set temperature hot") is True
        assert store.params == before

    def test_set_without_value(self, controller, store):
        before = store.params
        assert handle_command(controller, "/set top_k") is True
        assert store.params == before

    def test_clear(self, controller, store):
        store.append(store.new_message(Role.USER, "hello"))
        handle_command(controller, "/clear")
        assert store.get_all() == ()

    def test_unknown_command_prints_help(self, controller):
        assert handle_command(controller, "/help") is True


class TestRendering:

    def test_render_message_styles(self, store):
        user = render_message(store.new_message(Role.USER, "hi"))
        error = render_message(store.new_message(Role.ASSISTANT, "send failed", error=True))
        assert isinstance(user, Panel)
        assert user.title == "You"
        assert error.title == "Assistant"
        assert error.border_style == "red"

    def test_render_params(self, controller):
        table = render_params(controller)
        assert isinstance(table, Table)
        assert table.row_count == 4


@pytest.fixture
def fake_completion_client():
    """Patch the CLI's CompletionClient with an async-context-manager mock."""
    instance = MagicMock()
    instance.__aenter__ = AsyncMock(return_value=instance)
    instance.__aexit__ = AsyncMock(return_value=None)
    instance.send = AsyncMock(return_value="hi there")
    with patch("chat_assistant.cli.CompletionClient", return_value=instance) as client_cls:
        yield client_cls, instance


@pytest.fixture
def mock_setup_logging():
    with patch("chat_assistant.cli.setup_logging") as setup:
        yield setup


@pytest.fixture
def cli_settings(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    settings = Settings(_env_file=None, COMPLETION_ENDPOINT="http://testserver/api/completion")
    with patch("chat_assistant.cli.get_settings", return_value=settings):
        yield settings


class TestChatCommand:
    """Tests for the interactive `chat` loop."""

    def test_submit_renders_reply_then_quits(self, fake_completion_client, mock_setup_logging, cli_settings):
        client_cls, instance = fake_completion_client

        result = runner.invoke(app, ["chat"], input="hello\n/quit\n")

        assert result.exit_code == 0, result.output
        assert "hi there" in result.output
        assert "Goodbye!" in result.output
        client_cls.assert_called_once_with("http://testserver/api/completion", timeout=None)
        instance.send.assert_awaited_once()
        assert instance.send.await_args.args[0] == "hello"

    def test_failure_rendered_as_error(self, fake_completion_client, mock_setup_logging, cli_settings):
        _, instance = fake_completion_client
        instance.send.side_effect = TransportError("send failed", status=500)

        result = runner.invoke(app, ["chat"], input="hello\n/quit\n")

        assert result.exit_code == 0, result.output
        assert "Error: send failed" in result.output

    def test_invalid_params_block_send(self, fake_completion_client, mock_setup_logging, cli_settings):
        _, instance = fake_completion_client

        result = runner.invoke(app, ["chat"], input="/set temperature 5\nhello\n/quit\n")

        assert result.exit_code == 0, result.output
        assert "Invalid parameters" in result.output
        instance.send.assert_not_awaited()

    def test_blank_lines_and_eof(self, fake_completion_client, mock_setup_logging, cli_settings):
        _, instance = fake_completion_client

        result = runner.invoke(app, ["chat"], input="   \n")

        assert result.exit_code == 0, result.output
        assert "Goodbye!" in result.output
        instance.send.assert_not_awaited()

    def test_endpoint_option(self, fake_completion_client, mock_setup_logging, cli_settings):
        client_cls, _ = fake_completion_client

        runner.invoke(app, ["chat", "--endpoint", "http://other/api/completion"], input="/quit\n")

        client_cls.assert_called_once_with("http://other/api/completion", timeout=None)


class TestChatLogging:
    """The chat command's log configuration."""

    def test_defaults_to_warning(self, fake_completion_client, mock_setup_logging, cli_settings):
        runner.invoke(app, ["chat"], input="/quit\n")

        kwargs = mock_setup_logging.call_args.kwargs
        assert kwargs["log_level"] == "WARNING"
        assert kwargs["log_format"] == cli_settings.LOG_FORMAT

    def test_uses_configured_level(self, fake_completion_client, mock_setup_logging):
        settings = Settings(_env_file=None, LOG_LEVEL="debug", LOG_FORMAT="json")
        with patch("chat_assistant.cli.get_settings", return_value=settings):
            runner.invoke(app, ["chat"], input="/quit\n")

        kwargs = mock_setup_logging.call_args.kwargs
        assert kwargs["log_level"] == "DEBUG"
        assert kwargs["log_format"] == "json"

    def test_option_overrides_settings(self, fake_completion_client, mock_setup_logging, cli_settings):
        runner.invoke(app, ["chat", "--log-level", "error"], input="/quit\n")

        assert mock_setup_logging.call_args.kwargs["log_level"] == "ERROR"
