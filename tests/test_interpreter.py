from conftest import FIXED_NOW
from core.interpreter import (
    MALFORMED, UNKNOWN_DEVICE, UNRECOGNIZED_STATE, apply_reply, interpret_reply,
)
from core.prompt_builder import build_state_request_prompt
from data.models import DeviceKind

def _dev(repo, name):
    return repo.find_device_by_name(name)

def test_round_trip_updates_both_kinds(home):
    prompt = build_state_request_prompt(home.snapshot(), FIXED_NOW)
    assert "- DeviceA (On/Off Device) is off\n" in prompt

    result = apply_reply(home, "DeviceA is On\nDeviceB is 42", now=1000.0)

    assert _dev(home, "DeviceA").is_on is True
    assert _dev(home, "DeviceB").value == "42"
    assert [e.description for e in result.events] == ["DeviceA is now On", "DeviceB value is 42"]
    assert all(e.created_at == 1000.0 for e in result.events)
    assert len(home.list_events()) == 2
    assert result.skipped == []

def test_malformed_line_is_skipped(home):
    result = apply_reply(home, "DeviceA is on\nthe house looks cosy tonight")
    assert len(result.updates) == 1
    assert [(s.line, s.reason) for s in result.skipped] == [("the house looks cosy tonight", MALFORMED)]

def test_more_than_one_separator_is_malformed(home):
    result = apply_reply(home, "DeviceB is 42 is fine")
    assert result.updates == []
    assert result.skipped[0].reason == MALFORMED

def test_unknown_device_is_skipped(home):
    result = apply_reply(home, "Garage Door is open")
    assert result.updates == []
    assert result.events == []
    assert [s.reason for s in result.skipped] == [UNKNOWN_DEVICE]
    assert home.list_events() == []

def test_matching_is_case_insensitive(home):
    result = apply_reply(home, "devicea is ON\nDEVICEB is Hot")
    assert _dev(home, "DeviceA").is_on is True
    assert _dev(home, "DeviceB").value == "Hot"
    # event keeps the name as written by the model
    assert result.events[0].description == "devicea is now On"

def test_separator_is_literal(home):
    result = apply_reply(home, "DeviceA IS off\nDeviceA  is  off\nDeviceA:is off")
    assert result.updates == []
    assert len(result.skipped) == 3

def test_unrecognized_on_off_token_is_rejected(home):
    home.set_device_on(_dev(home, "DeviceA").id, True)
    result = apply_reply(home, "DeviceA is probably off")
    assert [s.reason for s in result.skipped] == [UNRECOGNIZED_STATE]
    assert _dev(home, "DeviceA").is_on is True

def test_off_token_and_trailing_whitespace(home):
    home.set_device_on(_dev(home, "DeviceA").id, True)
    apply_reply(home, "DeviceA is Off \r\n")
    assert _dev(home, "DeviceA").is_on is False

def test_blank_lines_are_ignored_silently(home):
    result = apply_reply(home, "\n\n   \nDeviceA is on\n\n")
    assert len(result.updates) == 1
    assert result.skipped == []

def test_lines_are_processed_in_order_last_wins(home):
    result = apply_reply(home, "DeviceB is 1\nbogus\nDeviceB is 2")
    assert _dev(home, "DeviceB").value == "2"
    assert [e.description for e in result.events] == ["DeviceB value is 1", "DeviceB value is 2"]

def test_same_reply_twice_is_idempotent_for_state(home):
    reply = "DeviceA is on\nDeviceB is 42"
    apply_reply(home, reply)
    first = [(d.is_on, d.value) for d in home.list_devices()]
    apply_reply(home, reply)
    assert [(d.is_on, d.value) for d in home.list_devices()] == first
    assert len(home.list_events()) == 4

def test_fallback_reply_changes_nothing(home):
    result = apply_reply(home, "Network error: connection refused")
    assert result.updates == []
    assert home.list_events() == []

def test_interpret_reply_is_pure(home):
    before = [(d.is_on, d.value) for d in home.list_devices()]
    interp = interpret_reply("DeviceA is on", home.list_devices())
    assert interp.updates[0].kind == DeviceKind.ON_OFF
    assert interp.updates[0].state is True
    assert [(d.is_on, d.value) for d in home.list_devices()] == before

def test_removed_device_between_interpret_and_apply(home):
    from core.interpreter import apply_interpretation
    interp = interpret_reply("DeviceA is on", home.list_devices())
    home.remove_device(_dev(home, "DeviceA").id)
    result = apply_interpretation(home, interp)
    assert result.updates == []
    assert [s.reason for s in result.skipped] == [UNKNOWN_DEVICE]
