"""
Builds count_tokens requests from collected text.
"""

from .errors import EmptyInputError
from .models import CountRequest, Message


def build_count_request(text: str, model: str) -> CountRequest:
    """Wrap text into a single user message for the given model.

    The content is passed through verbatim.

    Raises:
        EmptyInputError: If text is empty
    """
    if not text:
        raise EmptyInputError("empty input text")

    return CountRequest(
        model=model,
        messages=(Message(role="user", content=text),),
    )
