from dataclasses import asdict

from fastapi import APIRouter, Depends

from swasthya.api.deps import get_history
from swasthya.storage.history_store import HistoryLog

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
async def list_history(history: HistoryLog = Depends(get_history)):
    return [asdict(e) for e in history.entries()]


@router.delete("")
async def clear_history(history: HistoryLog = Depends(get_history)):
    history.clear()
    return {"status": "ok"}
