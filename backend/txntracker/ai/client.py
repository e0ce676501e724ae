import logging
import litellm
from typing import Optional, Dict, Any

from txntracker.config import settings

logger = logging.getLogger(__name__)

litellm.drop_params = True


class AIClient:

    def __init__(self):
        self.provider = settings.ai_provider
        self.model = self._get_model_string()
        self.api_key = self._get_api_key()
        self.api_base = self._get_api_base()
        self.timeout = settings.ai_timeout_seconds

    def _get_model_string(self) -> str:
        model = settings.ai_model

        if self.provider == "openrouter":
            if not model.startswith("openrouter/"):
                return f"openrouter/{model}"
            return model
        elif self.provider == "ollama":
            if not model.startswith("ollama/"):
                return f"ollama/{model}"
            return model
        else:
            return model

    def _get_api_key(self) -> Optional[str]:
        if self.provider == "openrouter":
            return settings.openrouter_api_key
        elif self.provider == "anthropic":
            return settings.anthropic_api_key
        elif self.provider == "openai":
            return settings.openai_api_key
        return None

    def _get_api_base(self) -> Optional[str]:
        if self.provider == "openrouter":
            return "https://openrouter.ai/api/v1"
        elif self.provider == "ollama":
            return settings.ai_base_url or "http://localhost:11434"
        return settings.ai_base_url

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        json_mode: bool = False
    ) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt}
        ]

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": self.timeout,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.api_base:
            kwargs["api_base"] = self.api_base

        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await litellm.acompletion(**kwargs)
            return response.choices[0].message.content
        except Exception as e:
            logger.error(f"AI completion error: {e}")
            raise


def strip_code_fence(response: Optional[str]) -> str:
    cleaned = (response or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


_ai_client: Optional[AIClient] = None

def get_ai_client() -> AIClient:
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client
