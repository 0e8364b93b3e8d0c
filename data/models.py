from enum import Enum
from typing import List, Optional
from uuid import uuid4
from sqlmodel import SQLModel, Field

def _new_id() -> str:
    return uuid4().hex

class DeviceKind(str, Enum):
    ON_OFF = "onOff"
    SENSOR = "sensor"

class Device(SQLModel):
    id: str = Field(default_factory=_new_id)
    name: str
    kind: DeviceKind = DeviceKind.ON_OFF
    is_on: Optional[bool] = None   # onOff only
    value: Optional[str] = None    # sensor only

    def state_text(self) -> str:
        if self.kind == DeviceKind.ON_OFF:
            return "on" if self.is_on else "off"
        return self.value if self.value is not None else "unknown value"

class Person(SQLModel):
    id: str = Field(default_factory=_new_id)
    name: str
    bio: str = ""

class Rule(SQLModel):
    id: str = Field(default_factory=_new_id)
    description: str

class Event(SQLModel):
    id: str = Field(default_factory=_new_id)
    description: str
    created_at: float = 0.0

class HomeSnapshot(SQLModel):
    """Read-only copy of the home context handed to the prompt builder."""
    devices: List[Device] = Field(default_factory=list)
    people: List[Person] = Field(default_factory=list)
    rules: List[Rule] = Field(default_factory=list)
    address: str = ""
