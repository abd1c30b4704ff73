import os
from dotenv import load_dotenv

load_dotenv()

# --- Groq API keys (comma-separated for rotation) ---
GROQ_API_KEYS = [k.strip() for k in os.getenv("GROQ_API_KEYS", "").split(",") if k.strip()]
if not GROQ_API_KEYS and os.getenv("GROQ_API_KEY"):
    GROQ_API_KEYS = [os.getenv("GROQ_API_KEY").strip()]
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "720"))  # 30 days

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/luma.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Calendar / streak day boundaries ---
# IANA zone name, e.g. "Asia/Jakarta". Empty = the server's local time zone.
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "")

# --- Text-to-speech ---
TTS_DEFAULT_LANG = os.getenv("TTS_DEFAULT_LANG", "id")
TTS_CHUNK_SIZE = int(os.getenv("TTS_CHUNK_SIZE", "200"))

# --- Assistant ---
ASSISTANT_NAME = os.getenv("ASSISTANT_NAME", "Luma")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
