import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    ENV = os.getenv("ENV", "dev")
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    MAX_ATTEMPTS = int(os.getenv("MAX_ATTEMPTS", "3"))
    INITIAL_BACKOFF_MS = int(os.getenv("INITIAL_BACKOFF_MS", "1000"))

    HISTORY_PATH = os.getenv("HISTORY_PATH", "data/history.json")
    HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "50"))

    VOSK_MODEL_HI = os.getenv("VOSK_MODEL_HI", "models/vosk/hi/vosk-model-hi-0.22")
    VOSK_MODEL_EN = os.getenv("VOSK_MODEL_EN", "models/vosk/en/vosk-model-en-us-0.22")
    SAMPLE_RATE = int(os.getenv("SAMPLE_RATE", "16000"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))

settings = Settings()
