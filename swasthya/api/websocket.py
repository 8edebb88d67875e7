import json
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket

from swasthya.api.deps import get_client, get_history, get_speech_engine
from swasthya.asr.engine import SpeechEngine
from swasthya.core.errors import InvalidSessionState
from swasthya.llm.gemini import StructuredResponseClient
from swasthya.logging import voice_session_var
from swasthya.models import Locale, Mode
from swasthya.pipeline.orchestrator import QueryOrchestrator
from swasthya.storage.history_store import HistoryLog

logger = logging.getLogger(__name__)

COMMANDS = {"start", "stop", "toggle_locale"}


def _parse_command(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None

    raw = raw.strip()

    # Case 1: plain "start" / "stop" / "toggle_locale"
    if raw in COMMANDS:
        return raw

    # Case 2: JSON { "type": "stop" }
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        return None

    if isinstance(payload, dict) and payload.get("type") in COMMANDS:
        return payload["type"]
    return None


ws_router = APIRouter()


@ws_router.websocket("/ws/voice")
async def voice_endpoint(
    ws: WebSocket,
    mode: Mode = Mode.DIAGNOSIS,
    locale: Locale = Locale.HINDI,
    client: StructuredResponseClient = Depends(get_client),
    history: HistoryLog = Depends(get_history),
    engine: SpeechEngine = Depends(get_speech_engine),
):
    await ws.accept()

    session_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H-%M-%S_%f")
    token = voice_session_var.set(session_id)
    logger.info("Voice session opened mode=%s locale=%s", mode.value, locale.value)

    async def send_state(snapshot):
        await ws.send_json({"type": "state", "session_id": session_id, **snapshot})

    orchestrator = QueryOrchestrator(
        mode=mode,
        client=client,
        history=history,
        engine=engine,
        locale=locale,
        on_update=send_state,
    )

    try:
        await orchestrator.publish()

        while True:
            msg = await ws.receive()

            if msg["type"] == "websocket.disconnect":
                break

            if msg.get("bytes"):
                engine.accept_audio(msg["bytes"])
                continue

            command = _parse_command(msg.get("text"))

            if command == "start":
                try:
                    orchestrator.start_recording()
                except InvalidSessionState:
                    logger.info("Ignoring start while already recording")
                await orchestrator.publish()

            elif command == "stop":
                orchestrator.stop_recording()
                await orchestrator.publish()

            elif command == "toggle_locale":
                await orchestrator.toggle_locale()

    finally:
        orchestrator.close()
        logger.info("Voice session closed")
        voice_session_var.reset(token)
