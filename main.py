import uvicorn
from fastapi import FastAPI

from swasthya.api.history import router as history_router
from swasthya.api.suggestions import router as suggestions_router
from swasthya.api.websocket import ws_router
from swasthya.config import settings
from swasthya.logging import configure_logging

configure_logging()

app = FastAPI(title="Swasthya")

app.include_router(ws_router)
app.include_router(suggestions_router)
app.include_router(history_router)

@app.get("/health")
def health():
    return {"status": "ok", "model": settings.GEMINI_MODEL}

if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
    )
