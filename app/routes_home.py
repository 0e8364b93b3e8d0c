from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Any, Callable, Dict, List, Optional
from app.deps import get_owner
from core.state_owner import HomeStateOwner
from data.models import Device, DeviceKind, Person, Rule
from data.repo import HomeRepo

router = APIRouter()

class DeviceIn(BaseModel):
    name: str
    kind: DeviceKind = DeviceKind.ON_OFF
    is_on: Optional[bool] = None
    value: Optional[str] = None

class PersonIn(BaseModel):
    name: str
    bio: str = ""

class RuleIn(BaseModel):
    description: str

class AddressIn(BaseModel):
    address: str

async def _remove(owner: HomeStateOwner, fn: Callable[..., Any], item_id: str):
    try:
        return await owner.call(lambda repo: fn(repo, item_id))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"{item_id} not found")

# ===== Devices =====
@router.get("/devices", response_model=List[Device])
async def list_devices(owner: HomeStateOwner = Depends(get_owner)):
    return await owner.call(lambda repo: repo.list_devices())

@router.post("/devices", response_model=Device, status_code=201)
async def add_device(body: DeviceIn, owner: HomeStateOwner = Depends(get_owner)):
    return await owner.call(lambda repo: repo.add_device(body.name, body.kind, is_on=body.is_on, value=body.value))

@router.delete("/devices/{device_id}", response_model=Device)
async def delete_device(device_id: str, owner: HomeStateOwner = Depends(get_owner)):
    return await _remove(owner, HomeRepo.remove_device, device_id)

# ===== People =====
@router.get("/people", response_model=List[Person])
async def list_people(owner: HomeStateOwner = Depends(get_owner)):
    return await owner.call(lambda repo: repo.list_people())

@router.post("/people", response_model=Person, status_code=201)
async def add_person(body: PersonIn, owner: HomeStateOwner = Depends(get_owner)):
    return await owner.call(lambda repo: repo.add_person(body.name, body.bio))

@router.delete("/people/{person_id}", response_model=Person)
async def delete_person(person_id: str, owner: HomeStateOwner = Depends(get_owner)):
    return await _remove(owner, HomeRepo.remove_person, person_id)

# ===== Rules =====
@router.get("/rules", response_model=List[Rule])
async def list_rules(owner: HomeStateOwner = Depends(get_owner)):
    return await owner.call(lambda repo: repo.list_rules())

@router.post("/rules", response_model=Rule, status_code=201)
async def add_rule(body: RuleIn, owner: HomeStateOwner = Depends(get_owner)):
    return await owner.call(lambda repo: repo.add_rule(body.description))

@router.delete("/rules/{rule_id}", response_model=Rule)
async def delete_rule(rule_id: str, owner: HomeStateOwner = Depends(get_owner)):
    return await _remove(owner, HomeRepo.remove_rule, rule_id)

# ===== Address =====
@router.get("/address")
async def get_address(owner: HomeStateOwner = Depends(get_owner)) -> Dict[str, str]:
    return {"address": await owner.call(lambda repo: repo.address)}

@router.put("/address")
async def set_address(body: AddressIn, owner: HomeStateOwner = Depends(get_owner)) -> Dict[str, str]:
    return {"address": await owner.call(lambda repo: repo.set_address(body.address))}

@router.get("/health")
async def health(owner: HomeStateOwner = Depends(get_owner)) -> Dict[str, int]:
    return await owner.call(lambda repo: repo.debug_counts())
