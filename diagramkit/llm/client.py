import logging

import requests

from diagramkit.config import LLM_TIMEOUT, OLLAMA_BASE_URL, OLLAMA_MODEL
from diagramkit.llm.base import TextGenerator
from diagramkit.utils.fences import extract_code_block

logger = logging.getLogger(__name__)


class LLMClient(TextGenerator):
    """Ollama chat client used to rewrite broken Mermaid code."""

    def __init__(
        self,
        base_url: str = OLLAMA_BASE_URL,
        model: str = OLLAMA_MODEL,
        timeout: int = LLM_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "options": {"temperature": 0.0},
            "messages": [
                {
                    "role": "user",
                    "content": prompt,
                }
            ],
            "stream": False,
        }

        logger.debug("[LLM] POST %s/api/chat model=%s", self.base_url, self.model)
        response = requests.post(
            f"{self.base_url}/api/chat",
            json=payload,
            timeout=self.timeout,
        )

        response.raise_for_status()

        data = response.json()
        try:
            content = data["message"]["content"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Unexpected chat response shape: {data!r:.200}") from exc

        return extract_code_block(content)
