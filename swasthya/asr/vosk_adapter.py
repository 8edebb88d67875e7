import json
import logging
from typing import Dict, Optional

from vosk import KaldiRecognizer, Model, SetLogLevel

from swasthya.asr.engine import SpeechEngine
from swasthya.config import settings
from swasthya.models import Locale

logger = logging.getLogger(__name__)

SetLogLevel(-1)

MODEL_PATHS: Dict[Locale, str] = {
    Locale.HINDI: settings.VOSK_MODEL_HI,
    Locale.ENGLISH: settings.VOSK_MODEL_EN,
}

_models: Dict[str, Model] = {}


def _load_model(path: str) -> Model:
    if path not in _models:
        logger.info("Loading Vosk model from %s", path)
        _models[path] = Model(path)
    return _models[path]


class VoskSpeechEngine(SpeechEngine):
    """
    Vosk recognizer fed with 16-bit mono PCM chunks via accept_audio().
    """

    def __init__(
        self,
        model_paths: Optional[Dict[Locale, str]] = None,
        sample_rate: int = settings.SAMPLE_RATE,
    ):
        super().__init__()
        self.model_paths = model_paths or MODEL_PATHS
        self.sample_rate = sample_rate
        self._recognizer: Optional[KaldiRecognizer] = None
        self._heard_speech = False

    @property
    def running(self) -> bool:
        return self._recognizer is not None

    def start(self) -> None:
        if self.running:
            raise RuntimeError("recognition already started")

        try:
            model = _load_model(self.model_paths[self.locale])
        except Exception as e:
            logger.error("Vosk model unavailable for %s: %s", self.locale.value, e)
            self._emit("error", "language-not-supported")
            self._emit("end")
            return

        recognizer = KaldiRecognizer(model, self.sample_rate)
        recognizer.SetPartialWords(self.interim_results)
        self._recognizer = recognizer
        self._heard_speech = False

    def accept_audio(self, data: bytes) -> None:
        if self._recognizer is None:
            return

        if self._recognizer.AcceptWaveform(data):
            result = json.loads(self._recognizer.Result())
            text = result.get("text", "").strip()

            if text:
                self._heard_speech = True
                self._emit("result", text)
                if not self.continuous:
                    self._finish()
        elif self.interim_results:
            partial = json.loads(self._recognizer.PartialResult())
            if partial.get("partial"):
                self._emit("partial", partial["partial"])

    def stop(self) -> None:
        if self._recognizer is None:
            return
        self._finish()

    def _finish(self) -> None:
        recognizer = self._recognizer
        self._recognizer = None

        # Flush whatever the decoder still holds
        result = json.loads(recognizer.FinalResult())
        text = result.get("text", "").strip()
        if text:
            self._heard_speech = True
            self._emit("result", text)

        if not self._heard_speech:
            self._emit("error", "no-speech")

        self._emit("end")
