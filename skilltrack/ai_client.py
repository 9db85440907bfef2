"""
AI Client — single OpenAI-compatible chat endpoint
===================================================
One instance is built at application startup (see main.lifespan) and handed
to whoever needs it. Nothing here is module-level state, so tests can swap
in a scripted fake with the same ``chat`` signature.

Used for:
  - Coding solution grading   (advisor_agent.check_solution)
  - Career roadmap generation (advisor_agent.generate_career_guidance)
"""

import logging
from typing import Optional

from openai import OpenAI

from .config import settings

logger = logging.getLogger(__name__)


class AIClient:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: Optional[str] = None,
        timeout: float = 60.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url or None
        self.timeout = timeout
        self._client: OpenAI | None = None

    @classmethod
    def from_settings(cls) -> "AIClient":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.OPENAI_TIMEOUT,
        )

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def chat(
        self,
        messages: list[dict],
        system: str = "",
        json_mode: bool = False,
        max_tokens: int = 2048,
        temperature: float = 0.2,
    ) -> str:
        """Send one chat completion and return the reply text."""
        full_messages = []
        if system:
            full_messages.append({"role": "system", "content": system})
        full_messages.extend(messages)

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        logger.info("AI request → %s (json_mode=%s)", self.model, json_mode)
        response = self._get_client().chat.completions.create(
            model=self.model,
            messages=full_messages,
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )
        return response.choices[0].message.content or ""

    def chat_single(self, prompt: str, system: str = "", **kwargs) -> str:
        """Convenience wrapper for a single user turn."""
        return self.chat(messages=[{"role": "user", "content": prompt}], system=system, **kwargs)

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None
