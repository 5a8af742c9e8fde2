"""
Result reporting to standard output.
"""

from typing import Optional

from rich.console import Console


def report_token_count(
    console: Console,
    count: int,
    model: Optional[str] = None,
    input_length: Optional[int] = None,
    verbose: bool = False,
) -> None:
    """Print the token count, preceded by model and input length when verbose."""
    if verbose:
        console.print(f"Model: {model}", markup=False, highlight=False, soft_wrap=True)
        console.print(f"Input length: {input_length} characters", highlight=False, soft_wrap=True)
    console.print(f"Token count: {count}", highlight=False, soft_wrap=True)
