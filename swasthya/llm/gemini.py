import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from google import genai
from google.genai import errors as genai_errors

from swasthya.config import settings
from swasthya.core.errors import ConfigError, RateLimited, UpstreamError, ValidationError
from swasthya.core.messages import message
from swasthya.llm.prompts import build_system_instruction
from swasthya.models import Locale, Mode, StructuredResult
from swasthya.pipeline.schema import SchemaMismatch, parse_structured_result

logger = logging.getLogger(__name__)

Invoker = Callable[[str, str], str]

_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)
_RATE_LIMIT_MARKERS = ("429", "RESOURCE_EXHAUSTED")


class GeminiInvoker:
    """
    Blocking call into Gemini. Returns the raw reply text.
    """

    def __init__(self, api_key: str, model: str):
        self.model = model
        self._client = genai.Client(api_key=api_key)

    def __call__(self, prompt: str, system_instruction: str) -> str:
        response = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
            config={
                "system_instruction": system_instruction,
                "response_mime_type": "application/json",
                "temperature": 0.0,
            },
        )
        return response.text or ""


@dataclass(frozen=True)
class Attempt:
    number: int
    next_delay_ms: int

    def next(self) -> "Attempt":
        return Attempt(number=self.number + 1, next_delay_ms=self.next_delay_ms * 2)


def strip_markdown_fence(raw_text: str) -> str:
    text = raw_text.strip()
    match = _FENCE_RE.match(text)
    if match and match.group(2):
        return match.group(2).strip()
    return text


def is_rate_limit_error(exc: BaseException) -> bool:
    if isinstance(exc, genai_errors.APIError):
        if exc.code == 429 or exc.status == "RESOURCE_EXHAUSTED":
            return True

    if getattr(exc, "code", None) == 429:
        return True

    text = str(exc)
    return any(marker in text for marker in _RATE_LIMIT_MARKERS)


def _error_code(exc: BaseException) -> Optional[int]:
    code = getattr(exc, "code", None)
    return code if isinstance(code, int) else None


def decode_reply(raw_text: str, locale: Locale) -> StructuredResult:
    text = strip_markdown_fence(raw_text)

    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Model reply is not valid JSON: %s", e)
        raise ValidationError(message("invalid_response", locale), detail=text) from e

    try:
        return parse_structured_result(parsed)
    except SchemaMismatch as e:
        logger.warning("Model reply has unexpected shape: %s", e)
        raise ValidationError(message("invalid_response", locale), detail=str(e)) from e


class StructuredResponseClient:
    def __init__(
        self,
        invoker: Optional[Invoker] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_attempts: Optional[int] = None,
        initial_backoff_ms: Optional[int] = None,
    ):
        self._invoker = invoker
        self._api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.max_attempts = max_attempts if max_attempts is not None else settings.MAX_ATTEMPTS
        self.initial_backoff_ms = (
            initial_backoff_ms if initial_backoff_ms is not None else settings.INITIAL_BACKOFF_MS
        )

    def _get_invoker(self) -> Invoker:
        if self._invoker is None:
            self._invoker = GeminiInvoker(api_key=self._api_key, model=self.model)
        return self._invoker

    async def fetch_structured(
        self,
        user_input: str,
        mode: Mode,
        locale: Locale,
    ) -> StructuredResult:
        """
        Ask the model for a structured answer to `user_input`.

        Only rate-limited calls are retried, with exponential backoff.
        Invalid replies and other upstream failures end the call at once.
        """
        mode = Mode(mode)
        locale = Locale(locale)

        if not self._api_key:
            logger.error("GEMINI_API_KEY is not set")
            raise ConfigError(message("config_missing", locale))

        invoker = self._get_invoker()
        system_instruction = build_system_instruction(mode, locale)
        loop = asyncio.get_running_loop()

        attempt = Attempt(number=1, next_delay_ms=self.initial_backoff_ms)

        while True:
            logger.info(
                "Structured query attempt %d/%d mode=%s locale=%s",
                attempt.number,
                self.max_attempts,
                mode.value,
                locale.value,
            )

            try:
                raw_text = await loop.run_in_executor(
                    None,
                    invoker,
                    user_input,
                    system_instruction,
                )
            except Exception as e:
                if not is_rate_limit_error(e):
                    logger.warning("Attempt %d failed: %s", attempt.number, e)
                    raise UpstreamError(
                        message("upstream_failed", locale),
                        code=_error_code(e),
                        detail=str(e),
                    ) from e

                if attempt.number >= self.max_attempts:
                    logger.warning("Rate limited on final attempt %d", attempt.number)
                    raise RateLimited(
                        message("retries_exhausted", locale),
                        attempts=attempt.number,
                        detail=str(e),
                    ) from e

                logger.warning(
                    "Attempt %d rate limited, retrying in %dms",
                    attempt.number,
                    attempt.next_delay_ms,
                )
                await asyncio.sleep(attempt.next_delay_ms / 1000)
                attempt = attempt.next()
                continue

            return decode_reply(raw_text, locale)
