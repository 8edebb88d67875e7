import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from swasthya.asr.engine import SpeechEngine
from swasthya.asr.session import TranscriptSession
from swasthya.core.errors import QueryError, VoiceError
from swasthya.core.messages import message
from swasthya.llm.gemini import StructuredResponseClient
from swasthya.models import Locale, Mode, StructuredResult
from swasthya.storage.history_store import HistoryLog

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[Dict[str, Any]], Awaitable[None]]


class QueryOrchestrator:
    """
    Feeds finalized transcripts into the structured client and keeps the
    state a UI needs: transcript, result, error, loading.
    """

    def __init__(
        self,
        mode: Mode,
        client: StructuredResponseClient,
        history: HistoryLog,
        engine: SpeechEngine,
        locale: Locale = Locale.HINDI,
        on_update: Optional[UpdateCallback] = None,
    ):
        self.mode = Mode(mode)
        self.locale = Locale(locale)
        self.client = client
        self.history = history
        self.on_update = on_update

        self.transcript: Optional[str] = None
        self.result: Optional[StructuredResult] = None
        self.error: Optional[str] = None
        self.loading = False

        self.session = TranscriptSession(
            engine,
            on_transcript=self._on_transcript,
            on_error=self._on_voice_error,
        )
        self._pending: Set[asyncio.Task] = set()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "locale": self.locale.value,
            "recording": self.session.is_recording,
            "transcript": self.transcript,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
            "loading": self.loading,
        }

    async def publish(self) -> None:
        if self.on_update:
            await self.on_update(self.snapshot())

    def _schedule(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    # --------------------
    # RECORDING
    # --------------------

    def start_recording(self) -> None:
        self.result = None
        self.transcript = None
        self.error = None
        try:
            self.session.start(self.locale)
        except VoiceError as e:
            self.error = message("voice_error_prefix", self.locale, message=e.message)

    def stop_recording(self) -> None:
        self.session.stop()

    def _on_transcript(self, transcript: str) -> None:
        self._schedule(self.submit(transcript))

    def _on_voice_error(self, error: VoiceError) -> None:
        self.error = message("voice_error_prefix", self.locale, message=error.message)
        if self.on_update:
            self._schedule(self.publish())

    # --------------------
    # QUERIES
    # --------------------

    async def submit(self, transcript: str) -> Optional[StructuredResult]:
        transcript = transcript.strip()
        if not transcript:
            return None

        self.transcript = transcript
        return await self._query(transcript, self.locale)

    async def toggle_locale(self) -> Optional[StructuredResult]:
        self.locale = self.locale.toggled()

        if not self.transcript:
            self.error = None
            await self.publish()
            return None

        # same transcript, new call with its own retry budget
        return await self._query(self.transcript, self.locale)

    async def _query(self, transcript: str, locale: Locale) -> Optional[StructuredResult]:
        self.loading = True
        self.error = None
        self.result = None
        await self.publish()

        try:
            result = await self.client.fetch_structured(transcript, self.mode, locale)
        except QueryError as e:
            logger.warning("Query failed: %s", e.message)
            self.error = e.message
            return None
        else:
            self.result = result
            entry_id = self.history.record(self.mode, transcript, result, locale)
            logger.info("Recorded history entry %s", entry_id)
            return result
        finally:
            self.loading = False
            await self.publish()

    async def wait_idle(self) -> None:
        while self._pending:
            await asyncio.gather(*self._pending)

    def close(self) -> None:
        self.on_update = None
        self.session.close()
