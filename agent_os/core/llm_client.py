"""
LLM Client for interacting with OpenAI and Anthropic APIs.

This module provides a unified interface for generating text with different
LLM providers. Each ``generate`` call is exactly one outbound request: there
are no retries and no internal timeout, callers own both.
"""

import json
import logging
from typing import Optional, Dict, Any, Literal

from anthropic import Anthropic
from openai import OpenAI

from ..config import Config
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-4o",
}


class LLMClient:
    """
    Unified client for interacting with LLM providers.

    Examples:
        >>> client = LLMClient(provider="anthropic")
        >>> text = client.generate(
        ...     prompt="Summarize the trip itinerary",
        ...     system="You are a travel assistant"
        ... )
    """

    def __init__(
        self,
        provider: Literal["anthropic", "openai"] = "anthropic",
        model: Optional[str] = None,
        api_key: Optional[str] = None
    ):
        """
        Initialize LLM client.

        Args:
            provider: LLM provider to use
            model: Specific model (defaults to Config.DEFAULT_MODEL, then the provider default)
            api_key: Explicit key (defaults to the environment)

        Raises:
            ConfigurationError: If no API key is available for the provider
        """
        if provider not in DEFAULT_MODELS:
            raise ConfigurationError(f"Unknown provider: {provider}")

        self.provider = provider
        self.model = model or Config.DEFAULT_MODEL or DEFAULT_MODELS[provider]
        self._request_count = 0

        key = api_key or Config.get_api_key(provider)
        if provider == "anthropic":
            self.client = Anthropic(api_key=key)
        else:
            self.client = OpenAI(api_key=key)

        logger.info(f"Initialized LLM client with provider: {provider}, model: {self.model}")

    @classmethod
    def from_config(cls) -> "LLMClient":
        """Build the client for Config.DEFAULT_LLM_PROVIDER."""
        return cls(provider=Config.DEFAULT_LLM_PROVIDER)

    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        json_mode: bool = False,
        temperature: float = 0.2,
        max_tokens: int = 4096
    ) -> str:
        """
        Generate text using the configured LLM provider.

        Args:
            prompt: User prompt
            system: System instruction
            json_mode: Ask the provider for a single JSON object
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            The raw text of the model's reply
        """
        if self.provider == "anthropic":
            text = self._generate_anthropic(prompt, system, json_mode, temperature, max_tokens)
        else:
            text = self._generate_openai(prompt, system, json_mode, temperature, max_tokens)

        self._request_count += 1
        return text

    def _generate_anthropic(
        self,
        prompt: str,
        system: Optional[str],
        json_mode: bool,
        temperature: float,
        max_tokens: int
    ) -> str:
        """Generate text using Anthropic API."""
        if json_mode:
            # No native JSON mode; the instruction carries the contract.
            system = (system or "") + "\n\nRespond with a single JSON object and nothing else."

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system.strip()

        response = self.client.messages.create(**kwargs)

        logger.debug(
            f"Anthropic request complete. Tokens: {response.usage.input_tokens} in, "
            f"{response.usage.output_tokens} out"
        )
        return "".join(block.text for block in response.content if getattr(block, "type", "text") == "text")

    def _generate_openai(
        self,
        prompt: str,
        system: Optional[str],
        json_mode: bool,
        temperature: float,
        max_tokens: int
    ) -> str:
        """Generate text using OpenAI API."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(**kwargs)

        if response.usage is not None:
            logger.debug(
                f"OpenAI request complete. Tokens: {response.usage.prompt_tokens} in, "
                f"{response.usage.completion_tokens} out"
            )
        return response.choices[0].message.content or ""

    def get_stats(self) -> Dict[str, Any]:
        """
        Get usage statistics.

        Returns:
            Dictionary with provider, model and request count
        """
        return {
            "provider": self.provider,
            "model": self.model,
            "total_requests": self._request_count,
        }


def extract_json(text: str) -> Any:
    """
    Parse the JSON payload out of an LLM reply.

    Handles markdown code fences and prose around a single object or array.

    Raises:
        ValueError: If no JSON can be parsed
    """
    if text is None:
        raise ValueError("Empty response")

    text = text.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    for opener, closer in (("{", "}"), ("[", "]")):
        start = text.find(opener)
        end = text.rfind(closer) + 1
        if start >= 0 and end > start:
            try:
                return json.loads(text[start:end])
            except json.JSONDecodeError:
                continue

    raise ValueError(f"Could not parse JSON from response: {text[:200]}")
