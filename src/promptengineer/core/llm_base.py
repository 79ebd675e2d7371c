"""Interface for chat-completion clients."""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class Completion:
    """Text of the first returned choice plus reported usage."""

    text: str
    model: str
    tokens_input: Optional[int] = None
    tokens_output: Optional[int] = None


class CompletionClientBase(Protocol):
    """
    Protocol/interface for completion clients.

    Implementations send one chat request and await one response.
    """

    model: str

    async def complete(self, messages: list[dict[str, str]]) -> Completion:
        """
        Send chat messages and return the first completion.

        Args:
            messages: Chat messages in order (system, then user)

        Returns:
            Completion with the first choice's text

        Raises:
            CompletionError: If the request fails or the response has no text
        """
        ...
