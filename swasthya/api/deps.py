from functools import lru_cache

from swasthya.asr.engine import SpeechEngine
from swasthya.asr.vosk_adapter import VoskSpeechEngine
from swasthya.config import settings
from swasthya.llm.gemini import StructuredResponseClient
from swasthya.storage.history_store import HistoryLog


@lru_cache
def get_client() -> StructuredResponseClient:
    return StructuredResponseClient()


@lru_cache
def get_history() -> HistoryLog:
    return HistoryLog(path=settings.HISTORY_PATH or None)


def get_speech_engine() -> SpeechEngine:
    # one recognizer per connection
    return VoskSpeechEngine()
