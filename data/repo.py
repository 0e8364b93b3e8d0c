# wizardofhome/data/repo.py
from __future__ import annotations

import time
from typing import Dict, List, Optional
from data.models import Device, DeviceKind, Event, HomeSnapshot, Person, Rule


def _now() -> float:
    return time.time()


def _remove_by_id(items: list, item_id: str):
    for i, item in enumerate(items):
        if item.id == item_id:
            return items.pop(i)
    raise KeyError(item_id)


# -----------------------------
# Home context (in-memory, one per session)
# -----------------------------
class HomeRepo:
    """
    Owns every device, person, rule and event of one running session plus the address.
    Nothing is persisted; the lifetime is the process.
    Not thread-safe: all access goes through core.state_owner.HomeStateOwner.
    """
    def __init__(self) -> None:
        self._devices: List[Device] = []
        self._people: List[Person] = []
        self._rules: List[Rule] = []
        self._events: List[Event] = []
        self._address: str = ""

    # ===== Devices =====
    def add_device(self, name: str, kind: DeviceKind = DeviceKind.ON_OFF,
                   is_on: Optional[bool] = None, value: Optional[str] = None) -> Device:
        kind = DeviceKind(kind)
        if kind == DeviceKind.ON_OFF:
            dev = Device(name=name, kind=kind, is_on=bool(is_on), value=None)
        else:
            dev = Device(name=name, kind=kind, is_on=None, value=value)
        self._devices.append(dev)
        return dev

    def remove_device(self, device_id: str) -> Device:
        return _remove_by_id(self._devices, device_id)

    def list_devices(self) -> List[Device]:
        return list(self._devices)

    def find_device_by_name(self, name: str) -> Optional[Device]:
        """Case-insensitive exact match; first hit in collection order."""
        needle = name.lower()
        for d in self._devices:
            if d.name.lower() == needle:
                return d
        return None

    def set_device_on(self, device_id: str, is_on: bool) -> Device:
        dev = self._get_device(device_id)
        if dev.kind != DeviceKind.ON_OFF:
            raise ValueError(f"device {dev.name!r} is not an on/off device")
        dev.is_on = is_on
        return dev

    def set_device_value(self, device_id: str, value: str) -> Device:
        dev = self._get_device(device_id)
        if dev.kind != DeviceKind.SENSOR:
            raise ValueError(f"device {dev.name!r} is not a sensor")
        dev.value = value
        return dev

    def _get_device(self, device_id: str) -> Device:
        for d in self._devices:
            if d.id == device_id:
                return d
        raise KeyError(device_id)

    # ===== People =====
    def add_person(self, name: str, bio: str = "") -> Person:
        p = Person(name=name, bio=bio)
        self._people.append(p)
        return p

    def remove_person(self, person_id: str) -> Person:
        return _remove_by_id(self._people, person_id)

    def list_people(self) -> List[Person]:
        return list(self._people)

    # ===== Rules =====
    def add_rule(self, description: str) -> Rule:
        r = Rule(description=description)
        self._rules.append(r)
        return r

    def remove_rule(self, rule_id: str) -> Rule:
        return _remove_by_id(self._rules, rule_id)

    def list_rules(self) -> List[Rule]:
        return list(self._rules)

    # ===== Address =====
    @property
    def address(self) -> str:
        return self._address

    def set_address(self, address: str) -> str:
        self._address = address
        return self._address

    # ===== Events (append-only, user may remove) =====
    def append_event(self, description: str, created_at: Optional[float] = None) -> Event:
        ev = Event(description=description, created_at=_now() if created_at is None else created_at)
        self._events.append(ev)
        return ev

    def remove_event(self, event_id: str) -> Event:
        return _remove_by_id(self._events, event_id)

    def list_events(self) -> List[Event]:
        return list(self._events)

    # ===== Snapshot / Introspection =====
    def snapshot(self) -> HomeSnapshot:
        return HomeSnapshot(
            devices=[d.model_copy() for d in self._devices],
            people=[p.model_copy() for p in self._people],
            rules=[r.model_copy() for r in self._rules],
            address=self._address,
        )

    def debug_counts(self) -> Dict[str, int]:
        return {
            "devices": len(self._devices),
            "people": len(self._people),
            "rules": len(self._rules),
            "events": len(self._events),
        }
