"""OpenAI chat-completions client."""

from typing import Any, Optional

from openai import AsyncOpenAI

from promptengineer.core.config import DEFAULT_MODEL, Config
from promptengineer.core.errors import MalformedResponseError, MissingCredentialError
from promptengineer.core.llm_base import Completion


class CompletionClient:
    """Async client for the OpenAI chat-completions API (or a compatible endpoint)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: Optional[float] = None,
    ):
        """
        Initialize the client.

        The underlying SDK client is created on first use, so a missing or
        invalid key only shows up when a request is made.

        Args:
            api_key: API key for the completion service
            model: Model identifier sent with every request
            base_url: Override for OpenAI-compatible endpoints
            timeout: Request timeout in seconds (None keeps the SDK default)
            temperature: Sampling temperature (None keeps the service default)
        """
        self.api_key = api_key.strip().strip('"').strip("'") if api_key else None
        self.model = model or DEFAULT_MODEL
        self.base_url = base_url
        self.timeout = timeout
        self.temperature = temperature
        self._client: Optional[AsyncOpenAI] = None

    @classmethod
    def from_config(cls, config: Config) -> "CompletionClient":
        """Create a client from explicit configuration."""
        return cls(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
            temperature=config.temperature,
        )

    def _get_client(self) -> AsyncOpenAI:
        if not self.api_key:
            raise MissingCredentialError()
        if self._client is None:
            kwargs: dict[str, Any] = {"api_key": self.api_key}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    async def complete(self, messages: list[dict[str, str]]) -> Completion:
        """
        Send chat messages and return the first completion.

        Args:
            messages: Chat messages in order (system, then user)

        Returns:
            Completion with the first choice's text

        Raises:
            MissingCredentialError: If no API key is configured
            MalformedResponseError: If the response carries no completion text
            openai.OpenAIError: On transport or HTTP status failures
        """
        client = self._get_client()

        request: dict[str, Any] = {"model": self.model, "messages": messages}
        if self.temperature is not None:
            request["temperature"] = self.temperature

        response = await client.chat.completions.create(**request)
        return self.parse_response(response)

    def parse_response(self, response: Any) -> Completion:
        """
        Extract the first choice's text and usage from a response.

        Raises:
            MalformedResponseError: If there are no choices or the text is missing
        """
        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedResponseError("Completion response contained no choices")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise MalformedResponseError("First completion choice has no text content")

        usage = getattr(response, "usage", None)
        return Completion(
            text=content,
            model=getattr(response, "model", None) or self.model,
            tokens_input=getattr(usage, "prompt_tokens", None),
            tokens_output=getattr(usage, "completion_tokens", None),
        )
