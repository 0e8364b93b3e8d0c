import httpx, time
from utils.env import env, openai_model, openai_url

prompt = """Given the following devices, people, and rules in a smart home, with the current time of day and location, provide updates on device states and any new events:

Devices:
- Oven (On/Off Device) is off
- Thermostat (Sensor) is 21C

People:
- Sam: works night shifts

Rules:
- Oven must be off after 9pm

Time of Day: 10:15 PM
Location: 221B Baker Street, London

Provide the current state of all smart home devices based on the rules. Just return one line per device, like: Oven is Off.
"""

t0 = time.perf_counter()
r = httpx.post(openai_url(), headers={
    "Authorization": f"Bearer {env('OPENAI_API_KEY')}",
    "Content-Type": "application/json",
}, json={
    "model": openai_model(),
    "messages": [{"role": "user", "content": prompt}],
    "temperature": 1.0,
    "max_tokens": 256,
}, timeout=60)
print(r.json()["choices"][0]["message"]["content"])
print(f"Time: {(time.perf_counter() - t0)*1000:.1f} ms")
