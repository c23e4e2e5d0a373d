"""LLM client and API call logic with fallback models. Supports Ollama, OpenAI and Gemini."""

import json
import os
import sys

import requests

from config import (
    DEFAULT_OLLAMA_URL,
    LLM_TEMPERATURE,
    OLLAMA_OPTIONS,
    OLLAMA_TIMEOUT,
    PROVIDER_DEFAULTS,
)


class LLMError(RuntimeError):
    """Raised when no model could answer a prompt."""


class OllamaClient:
    """Minimal client for a local Ollama server (/api/generate, /api/tags)."""

    def __init__(self, base_url: str, timeout: float = OLLAMA_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def generate(self, model: str, prompt: str, options: dict | None = None) -> str:
        response = self.session.post(
            f"{self.base_url}/api/generate",
            json={
                "model": model,
                "prompt": prompt,
                "stream": False,
                "options": options if options is not None else OLLAMA_OPTIONS,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json().get("response") or ""

    def list_models(self) -> list[str]:
        response = self.session.get(f"{self.base_url}/api/tags", timeout=10)
        response.raise_for_status()
        return [m.get("name", "") for m in response.json().get("models", [])]


def _get_ollama_client():
    return OllamaClient(os.getenv("OLLAMA_URL") or DEFAULT_OLLAMA_URL)


def _get_openai_client():
    from openai import OpenAI

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        print("Error: OPENAI_API_KEY not set. Set it in .env or environment.", file=sys.stderr)
        sys.exit(1)
    return OpenAI(api_key=api_key)


def _get_gemini_client():
    from google import genai

    api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
    if not api_key:
        print("Error: GOOGLE_API_KEY or GEMINI_API_KEY not set. Set it in .env or environment.", file=sys.stderr)
        sys.exit(1)
    return genai.Client(api_key=api_key)


def get_client(provider: str):
    """Create LLM client for the given provider."""
    if provider == "ollama":
        return _get_ollama_client()
    elif provider == "openai":
        return _get_openai_client()
    elif provider == "gemini":
        return _get_gemini_client()
    else:
        print(f"Error: Unknown provider '{provider}'. Use 'ollama', 'openai' or 'gemini'.", file=sys.stderr)
        sys.exit(1)


def resolve_model(provider: str, model: str | None = None) -> str:
    """Pick the model from CLI flag, LLM_MODEL env var, or provider default."""
    return model or os.getenv("LLM_MODEL") or PROVIDER_DEFAULTS[provider]["model"]


def check_connection(client, provider: str) -> bool:
    """Only Ollama needs a liveness check; hosted providers fail on first call."""
    if provider != "ollama":
        return True
    try:
        models = client.list_models()
    except requests.RequestException as e:
        print(f"Cannot connect to Ollama at {client.base_url}: {e}", file=sys.stderr)
        print("Make sure Ollama is running with: ollama serve", file=sys.stderr)
        return False
    print(f"Ollama is running. Available models: {', '.join(models) or '(none)'}", file=sys.stderr)
    return True


def _is_model_error(e: Exception) -> bool:
    """Check if error is due to invalid/unavailable model (try fallback)."""
    msg = str(e).lower()
    if "429" in msg or "rate" in msg:
        return False
    status = getattr(e, "status_code", None)
    if status is None:
        status = getattr(getattr(e, "response", None), "status_code", None)
    if status in (404, 400):
        return True
    model_phrases = ("model", "does not exist", "invalid model", "not found", "not available")
    return any(p in msg for p in model_phrases)


def parse_json_response(text: str | None) -> dict | None:
    """Parse the JSON object from an LLM reply, tolerating fences and chatter around it."""
    if not text:
        return None
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        text = "\n".join(lines[1:-1] if lines[-1].strip() == "```" else lines[1:])
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        print(f"Warning: Could not parse JSON from LLM reply: {e}", file=sys.stderr)
        print(f"  Reply was: {text[:200]}...", file=sys.stderr)
        return None
    return parsed if isinstance(parsed, dict) else None


def _generate(client, provider: str, model: str, prompt: str) -> str:
    if provider == "ollama":
        return client.generate(model, prompt)
    if provider == "openai":
        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=LLM_TEMPERATURE,
        )
        return response.choices[0].message.content or ""
    if provider == "gemini":
        response = client.models.generate_content(model=model, contents=prompt)
        return response.text or ""
    raise ValueError(f"Unknown provider: {provider}")


def call_llm(
    client,
    prompt: str,
    model: str,
    provider: str,
    fallbacks: list[str] | None = None,
) -> tuple[str, str]:
    """
    Send one prompt, falling back to other models when the requested one is
    unavailable. Returns (reply_text, model_used). No retries: any other
    failure raises LLMError so the caller can skip the item.
    """
    if provider not in PROVIDER_DEFAULTS:
        raise ValueError(f"Unknown provider: {provider}")
    fb = fallbacks if fallbacks is not None else PROVIDER_DEFAULTS[provider]["fallbacks"]
    models_to_try = [model] + [m for m in fb if m != model]
    last_error: Exception | None = None

    for current_model in models_to_try:
        try:
            return _generate(client, provider, current_model, prompt), current_model
        except Exception as e:
            last_error = e
            if _is_model_error(e):
                print(f"Model {current_model} failed: {e}. Trying fallback...", file=sys.stderr)
                continue
            raise LLMError(f"{provider} request failed: {e}") from e

    raise LLMError(f"All {provider} models failed: {last_error}") from last_error
