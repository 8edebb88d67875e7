import json
import logging
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from swasthya.config import settings
from swasthya.models import Locale, Mode, StructuredResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    id: str
    mode: str
    transcript: str
    result: Dict[str, Any]
    locale: str
    created_at: str


class HistoryLog:
    """
    Capped append-only log of successful queries, newest first.
    Backed by a JSON file when `path` is set, memory otherwise.
    """

    def __init__(self, path: Optional[Path] = None, limit: int = settings.HISTORY_LIMIT):
        self.path = Path(path) if path else None
        self.limit = limit
        self._entries: List[HistoryEntry] = self._load()

    def _load(self) -> List[HistoryEntry]:
        if self.path is None or not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return [HistoryEntry(**item) for item in raw][: self.limit]
        except (OSError, ValueError, TypeError) as e:
            logger.error("Failed to load history from %s: %s", self.path, e)
            return []

    def _save(self) -> None:
        if self.path is None:
            return

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps([asdict(e) for e in self._entries], ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error("Failed to save history to %s: %s", self.path, e)

    def record(
        self,
        mode: Mode,
        transcript: str,
        result: StructuredResult,
        locale: Locale,
    ) -> str:
        entry = HistoryEntry(
            id=str(uuid.uuid4()),
            mode=Mode(mode).value,
            transcript=transcript,
            result=result.to_dict(),
            locale=Locale(locale).value,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        self._save()
        return entry.id

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries = []
        self._save()

    def __len__(self) -> int:
        return len(self._entries)
