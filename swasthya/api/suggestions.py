from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from swasthya.api.deps import get_client, get_history
from swasthya.core.errors import ConfigError, QueryError, RateLimited
from swasthya.llm.gemini import StructuredResponseClient
from swasthya.models import Locale, Mode
from swasthya.storage.history_store import HistoryLog

router = APIRouter(prefix="/api", tags=["suggestions"])


class SuggestionRequest(BaseModel):
    userInput: Optional[str] = None
    mode: Optional[Mode] = None
    language: Optional[Locale] = None


def _status_for(error: QueryError) -> int:
    if isinstance(error, ConfigError):
        return 500
    if isinstance(error, RateLimited):
        return 429
    return 502


@router.post("/suggestions")
async def get_suggestions(
    body: SuggestionRequest,
    client: StructuredResponseClient = Depends(get_client),
    history: HistoryLog = Depends(get_history),
):
    if not body.userInput or body.mode is None or body.language is None:
        raise HTTPException(status_code=400, detail="Missing required parameters")

    try:
        result = await client.fetch_structured(body.userInput, body.mode, body.language)
    except QueryError as e:
        raise HTTPException(status_code=_status_for(e), detail=e.message)

    history.record(body.mode, body.userInput, result, body.language)
    return result.to_dict()
