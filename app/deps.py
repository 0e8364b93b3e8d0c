from fastapi import Depends, Request
from core.interface import Interface
from core.llm_client import ChatGPTClient
from core.state_owner import HomeStateOwner

def get_owner(request: Request) -> HomeStateOwner:
    return request.app.state.owner

def get_client() -> ChatGPTClient:
    return ChatGPTClient()

def get_interface(
    owner: HomeStateOwner = Depends(get_owner),
    client: ChatGPTClient = Depends(get_client),
) -> Interface:
    return Interface(owner, client)
