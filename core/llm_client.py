# core/llm_client.py

import time
from typing import Any, Dict, Optional

import httpx
import structlog

from utils.env import env, openai_model, openai_timeout, openai_url
from utils.jsonio import dump_body, first_choice_content

log = structlog.get_logger(__name__)

BODY_FAILED = "Failed to create request body"
UNEXPECTED_STRUCTURE = "Failed to parse response: Unexpected structure"

SAMPLING = {
    "temperature": 1.0,
    "max_tokens": 256,
    "top_p": 1.0,
    "frequency_penalty": 0.0,
    "presence_penalty": 0.0,
}

class ChatGPTClient:
    """
    One-shot chat-completion client.
    send_message() never raises: every failure comes back as a readable string
    that the caller treats as the reply. No retries.
    Auth: OPENAI_API_KEY env (loaded from .env if present).
    """
    def __init__(self, api_key: Optional[str] = None, url: Optional[str] = None,
                 model: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url or openai_url()
        self.model = model or openai_model()
        self.api_key = api_key or env("OPENAI_API_KEY")
        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is not set.")
        self._timeout = timeout if timeout is not None else openai_timeout()
        self._transport = transport
        self._headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_body(self, message: Any) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": message}],
            **SAMPLING,
        }

    async def send_message(self, message: str) -> str:
        data = dump_body(self.build_body(message))
        if data is None:
            log.warning("request_body_failed", model=self.model)
            return BODY_FAILED

        t0 = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as cli:
                r = await cli.post(self.url, headers=self._headers, content=data)
        except httpx.HTTPError as e:
            log.warning("llm_network_error", error=str(e) or type(e).__name__)
            return f"Network error: {str(e) or type(e).__name__}"
        t1 = time.perf_counter()
        log.info("llm_call", model=self.model, status=r.status_code, ms=round((t1 - t0) * 1000, 1))
        log.debug("llm_raw_response", body=r.text)

        try:
            payload = r.json()
        except ValueError as e:
            return f"Error parsing response: {e}"

        content = first_choice_content(payload)
        if content is None:
            log.warning("llm_unexpected_structure", status=r.status_code)
            return UNEXPECTED_STRUCTURE
        return content
