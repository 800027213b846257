"""Terminal front end using Typer.

Commands:
    chat-assistant chat    Interactive chat session against the completion endpoint
    chat-assistant serve   Run the stub completion service
"""
import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .api_clients.completion_client import CompletionClient
from .config import get_settings
from .models.messages import Message
from .models.params import PARAMETER_NAMES
from .services.chat_controller import ChatController, SubmitOutcome
from .services.session_store import SessionStore
from .utils.exceptions import ParameterValidationError
from .utils.logger import setup_logging

app = typer.Typer(
    name="chat-assistant",
    help="Minimal chat assistant with a stub completion service",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

HELP_TEXT = (
    "[dim]/set <param> <value>  change a parameter (temperature, top_p, top_k, reasoning_effort)\n"
    "/unset <param>        clear a parameter\n"
    "/params               show current parameters\n"
    "/history              reprint the conversation\n"
    "/clear                clear the conversation\n"
    "/quit                 leave[/dim]"
)


def render_message(message: Message) -> Panel:
    """Build the panel for one history entry."""
    time_label = message.timestamp.astimezone().strftime("%H:%M:%S")
    if message.is_user:
        return Panel(message.content, title="You", subtitle=time_label,
                     title_align="right", border_style="blue")
    style = "red" if message.is_error else "green"
    return Panel(message.content, title="Assistant", subtitle=time_label,
                 title_align="left", border_style=style)


def render_params(controller: ChatController) -> Table:
    table = Table(title="Generation parameters", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value")
    params = controller.store.params
    for name in PARAMETER_NAMES:
        value = getattr(params, name)
        if value is None:
            shown = "[dim]unset[/dim]"
        else:
            shown = str(getattr(value, "value", value))
        table.add_row(name, shown)
    return table


def handle_command(controller: ChatController, line: str) -> bool:
    """Run a slash command.

    Returns:
        False when the session should end, True otherwise.
    """
    parts = line[1:].split(maxsplit=2)
    command = parts[0].lower() if parts else ""

    if command in ("quit", "exit", "q"):
        return False

    if command == "clear":
        controller.clear()
        console.print("[dim]Conversation cleared.[/dim]")
    elif command == "params":
        console.print(render_params(controller))
    elif command == "history":
        history = controller.store.get_all()
        if not history:
            console.print("[dim]No messages yet. Type something to start.[/dim]")
        for message in history:
            console.print(render_message(message))
    elif command in ("set", "unset"):
        if len(parts) < 2 or (command == "set" and len(parts) < 3):
            console.print(f"[yellow]Usage: /{command} <param>{' <value>' if command == 'set' else ''}[/yellow]")
            return True
        value = parts[2] if command == "set" else ""
        try:
            controller.update_param(parts[1].lower(), value)
        except ParameterValidationError as e:
            console.print(f"[yellow]{e.message}[/yellow]")
            return True
        console.print(render_params(controller))
    else:
        console.print(HELP_TEXT)

    return True


@app.command()
def chat(
    endpoint: str = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="Completion endpoint URL (defaults to COMPLETION_ENDPOINT)"
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr (defaults to LOG_LEVEL, else WARNING)"
    ),
):
    """Interactive chat session."""
    settings = get_settings()
    if log_level is None:
        # Request logs stay off the terminal unless LOG_LEVEL is set
        log_level = settings.LOG_LEVEL if "LOG_LEVEL" in settings.model_fields_set else "WARNING"
    setup_logging(log_level=log_level.upper(), log_format=settings.LOG_FORMAT, stream=err_console.file)

    def _alert(message: str) -> None:
        console.print(Panel(message, title="Invalid parameters", border_style="yellow"))

    async def _chat():
        async with CompletionClient(
            endpoint or settings.COMPLETION_ENDPOINT,
            timeout=settings.COMPLETION_TIMEOUT_SECONDS,
        ) as client:
            controller = ChatController(SessionStore(), client, notify=_alert)

            console.print("[bold cyan]Chat Assistant[/bold cyan]")
            console.print("[dim]Hi! Type a message to start. /help lists commands.[/dim]\n")

            while True:
                try:
                    line = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if line.strip().startswith("/"):
                    if not handle_command(controller, line.strip()):
                        console.print("[dim]Goodbye![/dim]")
                        break
                    continue

                controller.input_text = line
                with console.status("[dim]Typing...[/dim]"):
                    outcome = await controller.submit()

                if outcome in (SubmitOutcome.COMPLETED, SubmitOutcome.FAILED):
                    console.print(render_message(controller.store.get_all()[-1]))

    asyncio.run(_chat())


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (defaults to SERVER_HOST)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (defaults to SERVER_PORT)"),
):
    """Run the stub completion service."""
    from . import create_app

    flask_app = create_app()
    settings = flask_app.config["SETTINGS"]
    flask_app.run(
        host=host or settings.SERVER_HOST,
        port=port or settings.SERVER_PORT,
        debug=settings.FLASK_DEBUG,
    )


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
