"""
AI Gateway client.

Issues a single OpenAI-compatible chat completion request and maps the
outcome onto the pipeline error taxonomy:

- 2xx  -> completion text (choices[0].message.content)
- 429  -> RateLimited
- 402  -> PaymentRequired
- other non-2xx -> GatewayError(status)
- network failure -> TransportError

No retries. The caller decides whether to re-invoke.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from careerpath.config import settings
from careerpath.utils.errors import (
    ConfigurationError,
    GatewayError,
    PaymentRequired,
    RateLimited,
    TransportError,
)

logger = logging.getLogger(__name__)

GATEWAY_TEMPERATURE = 0.7


class ModelGatewayClient:
    """Thin async client for the chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        endpoint_url: str,
        model: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError()
        self._api_key = api_key
        self.endpoint_url = endpoint_url
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def _build_body(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": GATEWAY_TEMPERATURE,
        }

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send the two-message conversation and return the completion text.

        Raises:
            RateLimited, PaymentRequired, GatewayError, TransportError
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        logger.info(f"Calling AI gateway for career recommendations (model={self.model})")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint_url,
                    headers=headers,
                    json=self._build_body(system_prompt, user_prompt),
                )
        except httpx.TransportError as e:
            logger.error(f"AI gateway unreachable: {type(e).__name__}: {e}")
            raise TransportError() from e

        if not response.is_success:
            logger.error(f"AI Gateway error: {response.status_code} {response.text[:500]}")
            if response.status_code == 429:
                raise RateLimited()
            if response.status_code == 402:
                raise PaymentRequired()
            raise GatewayError(response.status_code)

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected AI gateway response shape: {e}")
            raise GatewayError(
                response.status_code,
                "AI Gateway returned an unexpected response"
            ) from e

        if not isinstance(content, str):
            raise GatewayError(response.status_code, "AI Gateway returned an empty completion")

        logger.info("AI response received")
        return content


def get_gateway_client() -> ModelGatewayClient:
    """
    Build a gateway client from settings.

    Raises:
        ConfigurationError: If AI_GATEWAY_API_KEY is not configured.
    """
    if not settings.AI_GATEWAY_API_KEY:
        logger.error("AI_GATEWAY_API_KEY not configured")
        raise ConfigurationError()

    return ModelGatewayClient(
        api_key=settings.AI_GATEWAY_API_KEY,
        endpoint_url=settings.AI_GATEWAY_URL,
        model=settings.AI_GATEWAY_MODEL,
        timeout=settings.AI_GATEWAY_TIMEOUT_SECONDS,
    )
