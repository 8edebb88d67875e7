import logging
from enum import Enum
from typing import Callable, List, Optional

from swasthya.asr.engine import SpeechEngine
from swasthya.core.errors import InvalidSessionState, VoiceError
from swasthya.core.messages import message
from swasthya.models import Locale

logger = logging.getLogger(__name__)

BENIGN_ERRORS = {"no-speech", "aborted"}


class SessionState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    FINALIZING = "finalizing"
    CLOSED = "closed"


class TranscriptSession:
    """
    Turns one start/stop gesture into at most one transcript.

    Final segments are appended in delivery order. The transcript is only
    emitted on the engine's "end" event, so a segment that arrives after
    stop() still makes it in.
    """

    def __init__(
        self,
        engine: SpeechEngine,
        on_transcript: Callable[[str], None],
        on_error: Optional[Callable[[VoiceError], None]] = None,
    ):
        self.engine = engine
        self.on_transcript = on_transcript
        self.on_error = on_error

        self.state = SessionState.IDLE
        self.error: Optional[VoiceError] = None
        self.locale = Locale.HINDI
        self._segments: List[str] = []
        # end events still owed by runs that were aborted by an error
        self._stale_ends = 0

        engine.add_listener("result", self._handle_result)
        engine.add_listener("error", self._handle_error)
        engine.add_listener("end", self._handle_end)

    @property
    def is_recording(self) -> bool:
        return self.state in (SessionState.RECORDING, SessionState.FINALIZING)

    def start(self, locale: Locale) -> None:
        if self.state is not SessionState.IDLE:
            raise InvalidSessionState(f"cannot start while {self.state.value}")

        self.locale = Locale(locale)
        self._segments = []
        self.error = None
        self.engine.configure(self.locale, continuous=True, interim_results=False)

        # engine may report errors synchronously from start()
        self.state = SessionState.RECORDING
        try:
            self.engine.start()
        except Exception as e:
            logger.error("Speech engine refused to start: %s", e)
            self.state = SessionState.IDLE
            self.error = VoiceError("start-failed", message("voice_start_failed", self.locale))
            raise self.error from e

    def stop(self) -> None:
        if self.state is not SessionState.RECORDING:
            return
        self.state = SessionState.FINALIZING
        self.engine.stop()

    def close(self) -> None:
        self.engine.remove_listener("result", self._handle_result)
        self.engine.remove_listener("error", self._handle_error)
        self.engine.remove_listener("end", self._handle_end)

        was_recording = self.is_recording
        self.state = SessionState.CLOSED
        self._segments = []

        if was_recording:
            self.engine.stop()

    # --------------------
    # ENGINE EVENTS
    # --------------------

    def _handle_result(self, text: str) -> None:
        if not self.is_recording:
            return
        text = text.strip()
        if text:
            self._segments.append(text)

    def _handle_error(self, code: str) -> None:
        if code in BENIGN_ERRORS:
            logger.debug("Ignoring benign speech engine condition: %s", code)
            return

        logger.warning("Speech engine error: %s", code)
        self.error = VoiceError(code, message("voice_error", self.locale, code=code))
        self._segments = []

        if self.is_recording:
            self.state = SessionState.IDLE
            self._stale_ends += 1
            self.engine.stop()

        if self.on_error:
            self.on_error(self.error)

    def _handle_end(self) -> None:
        if self._stale_ends:
            self._stale_ends -= 1
            return

        if not self.is_recording:
            return

        transcript = " ".join(self._segments).strip()
        self._segments = []
        self.state = SessionState.IDLE

        if transcript:
            self.on_transcript(transcript)
