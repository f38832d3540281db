import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Logging
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    TRACE_LOG_FILENAME = os.getenv("TRACE_LOG_FILENAME", "session_trace.log")
    TRACE_LOG_PATH = os.path.join(LOG_DIR, TRACE_LOG_FILENAME)

    # Application
    SERVICE_HOST = os.getenv("SERVICE_HOST", "127.0.0.1")
    APP_PORT = int(os.getenv("APP_PORT", "8000"))

    # Data
    CATALOG_PATH = os.getenv("CATALOG_PATH", "data/spots.json")

    # Map
    INITIAL_LATITUDE = float(os.getenv("INITIAL_LATITUDE", "49.2642"))
    INITIAL_LONGITUDE = float(os.getenv("INITIAL_LONGITUDE", "-123.2484"))
    INITIAL_DELTA = float(os.getenv("INITIAL_DELTA", "0.02"))

    # Focus transition (suggestion pick)
    FOCUS_ZOOM_DELTA = float(os.getenv("FOCUS_ZOOM_DELTA", "0.01"))
    FOCUS_TRANSITION_MS = int(os.getenv("FOCUS_TRANSITION_MS", "1000"))


settings = Settings()
