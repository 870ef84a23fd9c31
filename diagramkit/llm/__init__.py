from diagramkit.llm.base import TextGenerator
from diagramkit.llm.client import LLMClient

__all__ = ["TextGenerator", "LLMClient"]
