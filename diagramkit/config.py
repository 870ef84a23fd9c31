import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


FALLBACK_LABEL = os.getenv("DIAGRAMKIT_FALLBACK_LABEL", "Step").strip() or "Step"
DEFAULT_DIRECTION = os.getenv("DIAGRAMKIT_DIRECTION", "TD").upper()
MIN_DIAGRAM_LENGTH = _env_int("DIAGRAMKIT_MIN_LENGTH", 15)
MAX_LABEL_LENGTH = _env_int("DIAGRAMKIT_MAX_LABEL_LENGTH", 0)

OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://host.docker.internal:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "mistral:7b-instruct")
LLM_TIMEOUT = _env_int("DIAGRAMKIT_LLM_TIMEOUT", 300)
