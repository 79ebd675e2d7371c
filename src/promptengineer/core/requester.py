"""Prompt generation: form fields in, generated prompt out."""

import logging
import time
from typing import Optional

from promptengineer.assembler.prompt_builder import build_messages
from promptengineer.core.config import Config
from promptengineer.core.errors import classify_exception
from promptengineer.core.event_bus import EVENT_GENERATION_FINISHED, EVENT_GENERATION_STARTED
from promptengineer.core.events import GenerationFinishedEvent, GenerationStartedEvent
from promptengineer.core.llm_base import CompletionClientBase
from promptengineer.core.llm_client import CompletionClient
from promptengineer.core.logging import get_logger
from promptengineer.core.state import FormState, GenerationOutcome

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to generate prompt. Please try again."


class PromptRequester:
    """Turns the current form fields into one completion request and stores the result."""

    def __init__(
        self,
        state: FormState,
        config: Optional[Config] = None,
        client: Optional[CompletionClientBase] = None,
    ):
        """
        Initialize the requester.

        Args:
            state: Form state to read fields from and write results to
            config: Explicit configuration used to build a client
            client: Ready-made client (takes precedence over config)

        Raises:
            ValueError: If neither config nor client is given
        """
        if client is None:
            if config is None:
                raise ValueError("PromptRequester needs either a config or a client")
            client = CompletionClient.from_config(config)
        self.state = state
        self.client = client

    async def generate(self) -> Optional[GenerationOutcome]:
        """
        Run one generation attempt.

        Nothing is sent when the prompt is empty or a request is already
        outstanding. Every failure is caught here and replaced with
        FAILURE_MESSAGE; the original reason stays in the returned outcome.

        Returns:
            The outcome, or None if the attempt was not allowed
        """
        state = self.state
        if not state.can_generate:
            logger.debug(
                "Generation skipped",
                extra={"has_prompt": bool(state.prompt), "in_flight": state.is_loading},
            )
            return None

        state.is_loading = True
        state.event_bus.publish(EVENT_GENERATION_STARTED, GenerationStartedEvent(model=self.client.model))

        started = time.perf_counter()
        try:
            messages = build_messages(state.fields)
            completion = await self.client.complete(messages)
        except Exception as e:
            latency_ms = (time.perf_counter() - started) * 1000
            logger.exception("Error generating prompt")
            outcome = GenerationOutcome(
                success=False,
                text=FAILURE_MESSAGE,
                failure_kind=classify_exception(e),
                error=str(e) or type(e).__name__,
                latency_ms=latency_ms,
            )
        else:
            latency_ms = (time.perf_counter() - started) * 1000
            get_logger().log_llm_call(
                model=completion.model,
                prompt=messages[-1]["content"],
                response=completion.text,
                tokens_input=completion.tokens_input,
                tokens_output=completion.tokens_output,
                latency_ms=latency_ms,
            )
            outcome = GenerationOutcome(
                success=True,
                text=completion.text,
                latency_ms=latency_ms,
                tokens_input=completion.tokens_input,
                tokens_output=completion.tokens_output,
            )
        finally:
            state.is_loading = False

        state.generated_prompt = outcome.text
        state.last_outcome = outcome
        state.event_bus.publish(
            EVENT_GENERATION_FINISHED,
            GenerationFinishedEvent(success=outcome.success, result=outcome.text, error=outcome.error),
        )
        return outcome
