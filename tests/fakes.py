from __future__ import annotations

import json

from swasthya.asr.engine import SpeechEngine


class FakeSpeechEngine(SpeechEngine):
    """Scripted engine: tests drive the events by hand."""

    def __init__(self, end_on_stop: bool = False, fail_start: bool = False) -> None:
        super().__init__()
        self.end_on_stop = end_on_stop
        self.fail_start = fail_start
        self.start_calls = 0
        self.stop_calls = 0
        self.configured: list[tuple] = []

    def configure(self, locale, continuous=True, interim_results=False) -> None:
        super().configure(locale, continuous, interim_results)
        self.configured.append((self.locale, continuous, interim_results))

    def start(self) -> None:
        self.start_calls += 1
        if self.fail_start:
            raise RuntimeError("recognition already started")

    def stop(self) -> None:
        self.stop_calls += 1
        if self.end_on_stop:
            self._emit("end")

    def accept_audio(self, data: bytes) -> None:
        self.say(data.decode("utf-8"))

    def say(self, text: str) -> None:
        self._emit("result", text)

    def fail(self, code: str) -> None:
        self._emit("error", code)

    def end(self) -> None:
        self._emit("end")


class FakeInvoker:
    """Returns (or raises) scripted replies in order and records every call."""

    def __init__(self, *replies) -> None:
        self.replies = list(replies)
        self.calls: list[tuple[str, str]] = []

    def __call__(self, prompt: str, system_instruction: str) -> str:
        self.calls.append((prompt, system_instruction))
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


class FakeAPIError(Exception):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


LOOKUP_REPLY = '{"medicineName": "Arnica", "symptoms": ["bruising", "soreness"]}'
DIAGNOSIS_REPLY = (
    '{"medicines": ['
    '{"name": "Belladonna", "symptoms": "sudden high fever", "potency": "30C", "dosage": "3 times a day"},'
    '{"name": "Bryonia", "symptoms": "dry cough, thirst"}'
    "]}"
)




class ScriptedRecognizer:
    """
    Stand-in for vosk.KaldiRecognizer.
    Audio chunks are b"final:<text>" (completes an utterance) or
    b"partial:<text>"; FinalResult() returns `final_text`.
    """

    def __init__(self, final_text: str = "") -> None:
        self.final_text = final_text
        self.partial_words: bool | None = None
        self.created_with: tuple | None = None
        self._result = ""
        self._partial = ""

    def SetPartialWords(self, enabled: bool) -> None:
        self.partial_words = enabled

    def AcceptWaveform(self, data: bytes) -> bool:
        kind, _, text = data.decode("utf-8").partition(":")
        if kind == "final":
            self._result = text
            self._partial = ""
            return True
        self._partial = text
        return False

    def Result(self) -> str:
        return json.dumps({"text": self._result})

    def PartialResult(self) -> str:
        return json.dumps({"partial": self._partial})

    def FinalResult(self) -> str:
        return json.dumps({"text": self.final_text})
