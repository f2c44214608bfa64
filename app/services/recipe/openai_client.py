from typing import Optional

from openai import OpenAI

from app.core.config import Settings, get_openai_api_key


class OpenAIClientMixin:
    """Lazily builds the OpenAI client the first time a service needs it."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            self._client = OpenAI(
                api_key=self.settings.openai_api_key or get_openai_api_key(),
                timeout=self.settings.openai_timeout_seconds,
                max_retries=0,
            )
        return self._client
