from typing import Protocol


class TextGenerationClient(Protocol):
    def generate(self, prompt: str) -> str: ...
