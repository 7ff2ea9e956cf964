from typing import List, Dict, Any, Optional
import logging
import httpx

from ..config import settings
from ..core.errors import ModelCallError

logger = logging.getLogger("linksuggest.llm")


class LLMClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.openai_api_key.get_secret_value()
        self.model = model or settings.completion_model
        self.endpoint = (base_url or settings.openai_base_url).rstrip("/") + "/chat/completions"
        self.timeout = timeout if timeout is not None else settings.llm_timeout
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self._transport = transport

    async def chat(
        self,
        system_prompt: str,
        messages: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Returns the raw message dict from OpenAI, e.g.:
        {
            "role": "assistant",
            "content": "..."
        }
        """
        if system_prompt:
            messages = [{"role": "system", "content": system_prompt}] + messages

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(
                    self.endpoint,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
            resp.raise_for_status()
            data = resp.json()
            return data["choices"][0]["message"]
        except httpx.TimeoutException as exc:
            logger.error("Completion request timed out after %.1fs", self.timeout)
            raise ModelCallError(
                f"Completion request timed out after {self.timeout:g}s"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Completion request failed (%s): %s", type(exc).__name__, exc)
            raise ModelCallError(
                f"Completion request failed: {str(exc) or type(exc).__name__}"
            ) from exc
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("Malformed completion response: %s", exc)
            raise ModelCallError("Completion response was malformed") from exc

    async def complete(self, prompt: str, system_prompt: str = "") -> str:
        """
        Single-turn completion: one user message in, final text out.
        """
        message = await self.chat(system_prompt, [{"role": "user", "content": prompt}])
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ModelCallError("Completion response contained no text")
        return content.strip()
