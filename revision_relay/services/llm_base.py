"""
Revision Relay — Abstract Generation Provider Interface
========================================================

What:  Abstract base class for services that turn a prompt into text.
How:   Concrete implementations inherit from GenerationProvider and implement
       generate() and health_check().
Who:   Called by GenerationRelay (generate) and the health route (health_check).

Implementations:
    - GeminiService: Google Gemini via google-generativeai
    - Test doubles in tests/conftest.py
"""

from abc import ABC, abstractmethod


class GenerationProvider(ABC):
    """
    Contract:
        - generate() sends one prompt and returns the model's text output
        - No retries; one call per request
        - Every implementation-specific error is wrapped in GenerationProviderError
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Send a prompt to the model and return its text output verbatim.

        Args:
            prompt: The fully interpolated instruction.

        Returns:
            str: The generated text (HTML for revision sheets).

        Raises:
            GenerationProviderError: The provider failed or returned no text.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Lightweight reachability check that does not consume generation quota.

        Returns: True if the provider is reachable, False otherwise. Never raises.
        """
        ...
