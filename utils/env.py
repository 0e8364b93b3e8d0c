import os
from dotenv import load_dotenv

load_dotenv(override=False)  # loads .env if present

DEFAULT_OPENAI_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_OPENAI_MODEL = "gpt-4-turbo-preview"

def env(key: str, default: str | None = None) -> str | None:
    return os.getenv(key, default)

def openai_url() -> str:
    return (env("OPENAI_URL") or DEFAULT_OPENAI_URL).rstrip("/")

def openai_model() -> str:
    return env("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL

def openai_timeout() -> float:
    return float(env("OPENAI_TIMEOUT", "60"))
