from swasthya.models import Locale, Mode, SymptomList
from swasthya.storage.history_store import HistoryLog


def _result(name: str) -> SymptomList:
    return SymptomList(subject_name=name, symptoms=("a", "b"))


def test_record_keeps_newest_first_and_evicts_oldest():
    log = HistoryLog(path=None, limit=50)

    for i in range(55):
        log.record(Mode.MEDICINE_LOOKUP, f"query {i}", _result(f"M{i}"), Locale.ENGLISH)

    entries = log.entries()
    assert len(entries) == 50
    assert entries[0].transcript == "query 54"
    assert entries[-1].transcript == "query 5"


def test_entry_fields():
    log = HistoryLog(path=None)

    entry_id = log.record(Mode.DIAGNOSIS, "fever", _result("Aconite"), Locale.HINDI)

    entry = log.entries()[0]
    assert entry.id == entry_id
    assert entry.mode == "diagnosis"
    assert entry.locale == "hi-IN"
    assert entry.result == {"medicineName": "Aconite", "symptoms": ["a", "b"]}
    assert entry.created_at


def test_file_backed_log_survives_reload(tmp_path):
    path = tmp_path / "history" / "history.json"
    log = HistoryLog(path=path)
    log.record(Mode.MEDICINE_LOOKUP, "Arnica", _result("Arnica"), Locale.ENGLISH)

    reloaded = HistoryLog(path=path)

    assert [e.transcript for e in reloaded.entries()] == ["Arnica"]


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    log = HistoryLog(path=path)

    assert len(log) == 0


def test_clear_persists(tmp_path):
    path = tmp_path / "history.json"
    log = HistoryLog(path=path)
    log.record(Mode.MEDICINE_LOOKUP, "Arnica", _result("Arnica"), Locale.ENGLISH)

    log.clear()

    assert HistoryLog(path=path).entries() == []
