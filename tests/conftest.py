from datetime import datetime
import pytest
from data.models import DeviceKind
from data.repo import HomeRepo

FIXED_NOW = datetime(2024, 1, 30, 21, 5)

class FakeClient:
    """Stands in for ChatGPTClient: records prompts, returns canned replies in order."""
    def __init__(self, *replies: str):
        self.replies = list(replies)
        self.prompts = []

    async def send_message(self, message: str) -> str:
        self.prompts.append(message)
        return self.replies.pop(0) if self.replies else ""

@pytest.fixture
def repo():
    return HomeRepo()

@pytest.fixture
def home(repo):
    repo.add_device("DeviceA", DeviceKind.ON_OFF, is_on=False)
    repo.add_device("DeviceB", DeviceKind.SENSOR)
    repo.add_person("Sam", "works night shifts")
    repo.add_rule("Oven must be off after 9pm")
    repo.set_address("221B Baker Street")
    return repo

@pytest.fixture(autouse=True)
def _api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
