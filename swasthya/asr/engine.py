from typing import Callable, Dict, List

from swasthya.models import Locale

EVENTS = ("result", "partial", "error", "end")


class SpeechEngine:
    """
    Continuous speech recognizer capability.

    Events:
    - "result"  (text)  final segment
    - "partial" (text)  only when interim results are enabled
    - "error"   (code)  e.g. "no-speech", "aborted", "audio-capture"
    - "end"     ()      recognition session is over
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {event: [] for event in EVENTS}
        self.locale: Locale = Locale.HINDI
        self.continuous = True
        self.interim_results = False

    def add_listener(self, event: str, callback: Callable) -> None:
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable) -> None:
        if callback in self._listeners[event]:
            self._listeners[event].remove(callback)

    def _emit(self, event: str, *args) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)

    def configure(self, locale: Locale, continuous: bool = True, interim_results: bool = False) -> None:
        self.locale = Locale(locale)
        self.continuous = continuous
        self.interim_results = interim_results

    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    def accept_audio(self, data: bytes) -> None:
        raise NotImplementedError
