from abc import ABC, abstractmethod


class TextGenerator(ABC):
    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Generate assistant text for a single user prompt"""
        pass
