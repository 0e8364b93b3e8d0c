# core/interface.py
from datetime import datetime
from typing import Callable, Optional

import structlog

from core.interpreter import ApplyResult, apply_reply
from core.llm_client import ChatGPTClient
from core.prompt_builder import build_prompt, build_state_request_prompt
from core.state_owner import HomeStateOwner
from data.models import Event

log = structlog.get_logger(__name__)


class Interface:
    """
    The two user actions:
      fetch_events:    home -> narrate prompt -> LLM -> reply logged as one event
      call_smart_home: home -> state-request prompt -> LLM -> parsed device updates + events
    Each call is one outbound request; nothing is queued, de-duplicated or retried.
    """
    def __init__(self, owner: HomeStateOwner, client: ChatGPTClient,
                 clock: Callable[[], datetime] = datetime.now):
        self.owner = owner
        self.client = client
        self.clock = clock

    async def fetch_events(self) -> Event:
        snap = await self.owner.call(lambda repo: repo.snapshot())
        prompt = build_prompt(snap, self.clock())
        reply = await self.client.send_message(prompt)
        event = await self.owner.call(lambda repo: repo.append_event(reply))
        log.info("events_fetched", event_id=event.id)
        return event

    async def call_smart_home(self, now: Optional[float] = None) -> ApplyResult:
        snap = await self.owner.call(lambda repo: repo.snapshot())
        prompt = build_state_request_prompt(snap, self.clock())
        reply = await self.client.send_message(prompt)
        result = await self.owner.call(lambda repo: apply_reply(repo, reply, now=now))
        log.info("smart_home_called", updates=len(result.updates), skipped=len(result.skipped))
        return result
