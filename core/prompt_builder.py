# core/prompt_builder.py
from datetime import datetime
from typing import Optional
from data.models import DeviceKind, HomeSnapshot

HEADER = (
    "Given the following devices, people, and rules in a smart home, "
    "with the current time of day and location, "
    "provide updates on device states and any new events:\n\n"
)

STATE_REQUEST = (
    "Provide the current state of all smart home devices based on the rules. "
    "Make sure to provide the sensor value. Do not provide extra information, "
    "just return one line per device with the device name and state, like: Oven is Off. "
    "If the device is a sensor, return the device name followed by \"is\" and the predicted sensor value."
)

_KIND_LABEL = {
    DeviceKind.ON_OFF: "On/Off Device",
    DeviceKind.SENSOR: "Sensor",
}

def format_time_of_day(now: datetime) -> str:
    # short 12h clock, no leading zero: "9:05 PM"
    return now.strftime("%I:%M %p").lstrip("0")

def build_prompt(snapshot: HomeSnapshot, now: Optional[datetime] = None) -> str:
    """
    Describe the home as plain text, in a fixed order:
    devices, people, rules, time of day, location.
    Free text goes in verbatim (no escaping); an empty collection leaves its header alone.
    """
    now = now or datetime.now()
    parts = [HEADER, "Devices:\n"]
    for d in snapshot.devices:
        parts.append(f"- {d.name} ({_KIND_LABEL[d.kind]}) is {d.state_text()}\n")
    parts.append("\nPeople:\n")
    for p in snapshot.people:
        parts.append(f"- {p.name}: {p.bio}\n")
    parts.append("\nRules:\n")
    for r in snapshot.rules:
        parts.append(f"- {r.description}\n")
    parts.append(f"\nTime of Day: {format_time_of_day(now)}\n")
    parts.append(f"Location: {snapshot.address}\n")
    return "".join(parts)

def build_state_request_prompt(snapshot: HomeSnapshot, now: Optional[datetime] = None) -> str:
    """Same description, plus the instruction to answer with '<name> is <state>' lines only."""
    return build_prompt(snapshot, now) + "\n" + STATE_REQUEST
