"""
Client for the generative ranking step.

The LLM is treated as an unreliable external service with a declared output
contract: every call goes through the OpenAI Responses API structured-output
parser, and anything that does not parse into the declared pydantic schema is
rejected as a whole. Failures are reported as GenerativeError with one of two
kinds so the orchestrator can degrade to an empty result:

- unavailable: timeouts, connection problems, rate limits, server/API errors and
  client construction failures (e.g. no OPENAI_API_KEY)
- schema_violation: the backend answered but the output did not fit the schema

The client keeps no conversation memory and no cache. The SDK's own retries are
disabled; the only retry is the optional bounded one controlled by max_attempts,
and it only applies to an unavailable backend.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import openai
from openai import OpenAI
from pydantic import BaseModel

from .config import DEFAULT_MAX_ATTEMPTS, DEFAULT_MODEL, DEFAULT_TIMEOUT, MatchSettings
from .errors import GenerativeError
from .prompts import PromptArtifact


logger = logging.getLogger(__name__)

RETRY_BACKOFF_SECONDS = 0.8


class GenerativeRankingClient:
    """Runs a compiled prompt against the generative backend and returns the parsed schema.

    Args:
        client: Optional pre-built OpenAI client (or compatible object exposing
            ``responses.parse``). Built lazily from the environment when omitted.
        model: Model name; defaults to env ``OPENAI_MODEL`` via MatchSettings.
        timeout: Per-request timeout in seconds.
        max_attempts: Total attempts per call. 1 means a single attempt, no retry.
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep=time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._client = client
        self.model = model
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: MatchSettings, client: Optional[Any] = None) -> "GenerativeRankingClient":
        return cls(
            client=client,
            model=settings.model,
            timeout=settings.timeout,
            max_attempts=settings.max_attempts,
        )

    def _get_client(self) -> Any:
        if self._client is None:
            try:
                self._client = OpenAI(timeout=self.timeout, max_retries=0)
            except openai.OpenAIError as e:
                raise GenerativeError(GenerativeError.UNAVAILABLE, f"OpenAI client init failed ({e})", cause=e) from e
        return self._client

    def _call_once(self, artifact: PromptArtifact) -> BaseModel:
        client = self._get_client()
        try:
            parsed = client.responses.parse(  # type: ignore[call-arg]
                model=str(self.model),
                input=artifact.messages(),
                text_format=artifact.text_format,  # type: ignore[arg-type]
                timeout=self.timeout,
            )
        except (openai.LengthFinishReasonError, openai.ContentFilterFinishReasonError, ValueError) as e:
            # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
            raise GenerativeError(
                GenerativeError.SCHEMA_VIOLATION, f"{type(e).__name__}: {e}", cause=e
            ) from e
        except openai.OpenAIError as e:
            raise GenerativeError(GenerativeError.UNAVAILABLE, f"{type(e).__name__}: {e}", cause=e) from e

        output = getattr(parsed, "output_parsed", None)
        if output is None:
            raise GenerativeError(GenerativeError.SCHEMA_VIOLATION, "structured parse returned None")
        if not isinstance(output, artifact.text_format):
            # Some clients hand back plain dicts; hold them to the same schema
            try:
                output = artifact.text_format.model_validate(output)
            except ValueError as e:
                raise GenerativeError(
                    GenerativeError.SCHEMA_VIOLATION, f"{type(e).__name__}: {e}", cause=e
                ) from e
        return output

    def rank(self, artifact: PromptArtifact) -> BaseModel:
        """Send one compiled prompt and return the schema-conformant result.

        Raises:
            GenerativeError: ``unavailable`` or ``schema_violation``; never a partial result.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._call_once(artifact)
            except GenerativeError as e:
                if e.kind == GenerativeError.UNAVAILABLE and attempt < self.max_attempts:
                    logger.info(
                        "Generative backend unavailable (attempt %d/%d): %s; retrying",
                        attempt,
                        self.max_attempts,
                        e,
                    )
                    self._sleep(RETRY_BACKOFF_SECONDS * attempt)
                    continue
                raise
        # Unreachable: the loop either returns or raises
        raise GenerativeError(GenerativeError.UNAVAILABLE, "no attempts made")
