#!/usr/bin/env python3
import asyncio, time
import pandas as pd
from core.interface import Interface
from core.llm_client import ChatGPTClient
from core.state_owner import HomeStateOwner
from data.models import DeviceKind
from utils.logging import configure_logging

DEVICES = [
    ("Oven", DeviceKind.ON_OFF, False, None),
    ("Living Room Lamp", DeviceKind.ON_OFF, True, None),
    ("Thermostat", DeviceKind.SENSOR, None, "21C"),
    ("Front Door Camera", DeviceKind.SENSOR, None, None),
    # ("Garage Door", DeviceKind.ON_OFF, False, None),
]
PEOPLE = [
    ("Sam", "works night shifts, sleeps until noon"),
    ("Alex", "cooks dinner around 7pm"),
]
RULES = [
    "Turn the lamp off when nobody is in the living room",
    "Oven must be off after 9pm",
]
ADDRESS = "221B Baker Street, London"

def _seed(repo):
    for name, kind, is_on, value in DEVICES:
        repo.add_device(name, kind, is_on=is_on, value=value)
    for name, bio in PEOPLE:
        repo.add_person(name, bio)
    for r in RULES:
        repo.add_rule(r)
    repo.set_address(ADDRESS)

async def main():
    configure_logging()
    owner = HomeStateOwner()
    owner.start()
    await owner.call(_seed)
    iface = Interface(owner, ChatGPTClient())

    t0 = time.perf_counter()
    result = await iface.call_smart_home()
    dt = (time.perf_counter() - t0) * 1000

    devices = await owner.call(lambda repo: repo.list_devices())
    df = pd.DataFrame(
        [{"name": d.name, "kind": d.kind.value, "state": d.state_text()} for d in devices],
        columns=["name", "kind", "state"],
    )
    print(df.to_string(index=False))
    print(f"updates={len(result.updates)} skipped={len(result.skipped)} time_ms={dt:.1f}")
    for s in result.skipped:
        print(f"  skipped[{s.reason}]: {s.line}")

    event = await iface.fetch_events()
    print("\nNarrated event:\n" + event.description)
    await owner.stop()

if __name__ == "__main__":
    asyncio.run(main())
