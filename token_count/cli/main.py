"""
CLI interface for token-count.

Counts the tokens of piped text and/or files via the Anthropic API.
"""

import logging
import sys
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.text import Text

from token_count.config.loader import DEFAULT_MODEL, Settings, load_api_key, load_settings
from token_count.core.errors import TokenCountError
from token_count.core.input_collector import collect_input
from token_count.core.reporter import report_token_count
from token_count.core.request_builder import build_count_request
from token_count.sdk.anthropic_client import TokenCountClient

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(error: Exception) -> None:
    """Print a single error line and exit with the failure code."""
    err_console.print(Text.assemble(("Error: ", "bold red"), str(error)), soft_wrap=True)
    sys.exit(EXIT_CODE_FAIL)


@app.command()
def count(
    files: Optional[List[str]] = typer.Argument(
        None,
        help="Files to count, concatenated after any piped input"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        help=f"Model to use for token counting [default: {DEFAULT_MODEL}]"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show model and input length before the count"
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML settings file (model, endpoint, api_version, timeout)"
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging on stderr"
    ),
):
    """
    Count input tokens for text piped on stdin and/or read from FILES.

    Requires the ANTHROPIC_API_KEY environment variable.
    """
    _configure_logging(debug)
    load_dotenv()

    try:
        api_key = load_api_key()
        settings = load_settings(config) if config else Settings()
        model_name = model if model is not None else settings.model

        text = collect_input(files or [])
        logger.debug("Collected %d characters of input", len(text))

        request = build_count_request(text, model_name)
        client = TokenCountClient(api_key, config=settings.client)
        result = client.count_tokens(request)

        report_token_count(
            console,
            result.input_tokens,
            model=model_name,
            input_length=len(text),
            verbose=verbose,
        )
    except TokenCountError as e:
        _fail(e)

    sys.exit(EXIT_CODE_PASS)


if __name__ == "__main__":
    app()
