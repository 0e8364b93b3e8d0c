# core/interpreter.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

import structlog

from data.models import Device, DeviceKind, Event
from data.repo import HomeRepo

log = structlog.get_logger(__name__)

SEPARATOR = " is "

MALFORMED = "malformed"
UNKNOWN_DEVICE = "unknown_device"
UNRECOGNIZED_STATE = "unrecognized_state"

_ON_OFF_TOKENS = {"on": True, "off": False}


@dataclass(frozen=True)
class DeviceUpdate:
    device_id: str
    name: str                       # as written in the reply
    kind: DeviceKind
    state: Union[bool, str]         # bool for onOff, text for sensors

    def describe(self) -> str:
        if self.kind == DeviceKind.ON_OFF:
            return f"{self.name} is now {'On' if self.state else 'Off'}"
        return f"{self.name} value is {self.state}"


@dataclass(frozen=True)
class SkippedLine:
    line: str
    reason: str


@dataclass
class Interpretation:
    updates: List[DeviceUpdate] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)


@dataclass
class ApplyResult:
    updates: List[DeviceUpdate] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)


def _find(devices: Iterable[Device], name: str) -> Optional[Device]:
    needle = name.lower()
    for d in devices:
        if d.name.lower() == needle:
            return d
    return None


def _skip(out: Interpretation, line: str, reason: str) -> None:
    log.info("reply_line_skipped", line=line, reason=reason)
    out.skipped.append(SkippedLine(line=line, reason=reason))


def interpret_reply(text: str, devices: Iterable[Device]) -> Interpretation:
    """
    Map a freeform model reply onto device updates, one line at a time.

    Each non-blank line must split on the literal " is " into exactly two parts:
    a device name (matched case-insensitively) and a state. On/off devices accept
    only "on" / "off" (any casing); sensors take the state verbatim.
    A line that fails any step is recorded in `skipped` and the rest carry on.
    """
    devices = list(devices)
    out = Interpretation()
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue

        parts = line.split(SEPARATOR)
        if len(parts) != 2:
            _skip(out, line, MALFORMED)
            continue
        name, state = parts

        dev = _find(devices, name)
        if dev is None:
            _skip(out, line, UNKNOWN_DEVICE)
            continue

        if dev.kind == DeviceKind.ON_OFF:
            token = state.strip().lower()
            if token not in _ON_OFF_TOKENS:
                _skip(out, line, UNRECOGNIZED_STATE)
                continue
            out.updates.append(DeviceUpdate(dev.id, name, dev.kind, _ON_OFF_TOKENS[token]))
        else:
            out.updates.append(DeviceUpdate(dev.id, name, dev.kind, state))
    return out


def apply_interpretation(repo: HomeRepo, interp: Interpretation,
                         now: Optional[float] = None) -> ApplyResult:
    """Write updates into the home (overwrite, never toggle) and log one event per update."""
    result = ApplyResult(skipped=list(interp.skipped))
    for upd in interp.updates:
        try:
            if upd.kind == DeviceKind.ON_OFF:
                repo.set_device_on(upd.device_id, bool(upd.state))
            else:
                repo.set_device_value(upd.device_id, str(upd.state))
        except KeyError:
            # removed between interpretation and apply
            log.info("device_gone", device_id=upd.device_id, name=upd.name)
            result.skipped.append(SkippedLine(line=upd.describe(), reason=UNKNOWN_DEVICE))
            continue
        result.updates.append(upd)
        result.events.append(repo.append_event(upd.describe(), created_at=now))
    return result


def apply_reply(repo: HomeRepo, text: str, now: Optional[float] = None) -> ApplyResult:
    return apply_interpretation(repo, interpret_reply(text, repo.list_devices()), now=now)
