from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import List, Union
from app.deps import get_interface, get_owner
from core.interface import Interface
from core.state_owner import HomeStateOwner
from data.models import DeviceKind, Event

router = APIRouter()

class UpdateOut(BaseModel):
    device_id: str
    name: str
    kind: DeviceKind
    state: Union[bool, str]

class SkippedOut(BaseModel):
    line: str
    reason: str

class SmartHomeOut(BaseModel):
    updates: List[UpdateOut] = Field(default_factory=list)
    skipped: List[SkippedOut] = Field(default_factory=list)
    events: List[Event] = Field(default_factory=list)

@router.get("", response_model=List[Event])
async def list_events(owner: HomeStateOwner = Depends(get_owner)):
    return await owner.call(lambda repo: repo.list_events())

@router.delete("/{event_id}", response_model=Event)
async def delete_event(event_id: str, owner: HomeStateOwner = Depends(get_owner)):
    try:
        return await owner.call(lambda repo: repo.remove_event(event_id))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"{event_id} not found")

@router.post("/fetch", response_model=Event)
async def fetch_events(iface: Interface = Depends(get_interface)):
    # narrate: the whole reply becomes one event
    return await iface.fetch_events()

@router.post("/call-smart-home", response_model=SmartHomeOut)
async def call_smart_home(iface: Interface = Depends(get_interface)):
    result = await iface.call_smart_home()
    return SmartHomeOut(
        updates=[UpdateOut(device_id=u.device_id, name=u.name, kind=u.kind, state=u.state) for u in result.updates],
        skipped=[SkippedOut(line=s.line, reason=s.reason) for s in result.skipped],
        events=result.events,
    )
