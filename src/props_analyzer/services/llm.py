"""
Generative service access.

Single entry-point ``generate_completion(prompt, model_id)`` that hides the
differences between Gemini, OpenAI and Ollama.

* Gemini: Generative Language REST API via plain ``requests``
* OpenAI: uses the ``openai`` Python SDK
* Ollama: local REST API compatible with ``/v1/chat/completions``

Returns **str** (the completion text) or raises ``LLMError``. Every call
carries a timeout; expiry is reported as ``LLMError`` like any other failure.

Credentials come from ``Settings`` (``GEMINI_API_KEY``, ``OPENAI_API_KEY``,
``OLLAMA_URL``).
"""

from __future__ import annotations

from typing import Any

import openai
import requests

from ..core.config import SUPPORTED_PROVIDERS, Settings, normalize_model_id, settings
from ..core.exceptions import ConfigurationError, LLMError
from ..core.logging import LoggerMixin


# --------------------------------------------------------------------------- #
#  Public interface
# --------------------------------------------------------------------------- #
def generate_completion(
    prompt: str,
    model_id: str,
    *,
    config: Settings | None = None,
    timeout: float | None = None,
    temperature: float | None = None,
) -> str:
    """
    Send one prompt and return the completion text.

    Args:
        prompt: Full instruction text
        model_id: Provider-prefixed model, e.g. ``gemini/gemini-2.5-flash``,
            ``openai/gpt-4o-mini`` or ``ollama/llama3``
        config: Settings holding credentials and endpoints
        timeout: Per-call timeout in seconds
        temperature: Sampling temperature (back-end permitting)

    Raises:
        ConfigurationError: If the provider prefix is unknown
        LLMError: If the call fails, is rejected or times out
    """
    config = config or settings
    timeout = timeout if timeout is not None else config.request_timeout_seconds
    temperature = temperature if temperature is not None else config.temperature

    provider, _, model = model_id.partition("/")
    if provider not in SUPPORTED_PROVIDERS or not model:
        raise ConfigurationError("Unknown LLM back-end", model_id=model_id)

    if provider == "gemini":
        return _call_gemini(prompt, model, config, timeout, temperature)
    if provider == "openai":
        return _call_openai(prompt, model, config, timeout, temperature)
    return _call_ollama(prompt, model, config, timeout, temperature)


class LLMClient(LoggerMixin):
    """Callable completion capability bound to one model and settings."""

    def __init__(self, model: str | None = None, config: Settings | None = None) -> None:
        self.config = config or settings
        self.model = normalize_model_id(model or self.config.model)
        if self.model.partition("/")[0] not in SUPPORTED_PROVIDERS:
            raise ConfigurationError("Unknown LLM back-end", model_id=self.model)

    def complete(self, prompt: str) -> str:
        self.logger.debug("llm_request", model=self.model, prompt_chars=len(prompt))
        text = generate_completion(prompt, self.model, config=self.config)
        self.logger.debug("llm_response", model=self.model, completion_chars=len(text))
        return text

    __call__ = complete


# --------------------------------------------------------------------------- #
#  HTTP helper
# --------------------------------------------------------------------------- #
def _post_json(
    backend: str,
    url: str,
    payload: dict[str, Any],
    timeout: float,
    headers: dict[str, str] | None = None,
) -> Any:
    try:
        r = requests.post(url, json=payload, headers=headers, timeout=timeout)
    except requests.Timeout as e:
        raise LLMError(f"{backend} request timed out", timeout=timeout) from e
    except requests.RequestException as e:
        raise LLMError(f"{backend} request failed", error=str(e)) from e

    if r.status_code == 429:
        raise LLMError(f"{backend} rate limit exceeded", status=429)
    if r.status_code != 200:
        raise LLMError(
            f"{backend} responded {r.status_code}", status=r.status_code, body=r.text[:200]
        )
    try:
        return r.json()
    except ValueError as e:
        raise LLMError(f"{backend} returned a non-JSON body", body=r.text[:200]) from e


# --------------------------------------------------------------------------- #
#  Back-end: Gemini
# --------------------------------------------------------------------------- #
def _call_gemini(
    prompt: str, model: str, config: Settings, timeout: float, temperature: float
) -> str:
    if not config.gemini_api_key:
        raise LLMError("GEMINI_API_KEY env var missing")

    endpoint = f"{config.gemini_api_url.rstrip('/')}/models/{model}:generateContent"
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": config.gemini_api_key,
    }
    payload = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {"temperature": temperature},
    }

    data = _post_json("Gemini", endpoint, payload, timeout, headers=headers)
    if not isinstance(data, dict):
        raise LLMError("Gemini returned an unexpected payload", body=str(data)[:200])

    block_reason = (data.get("promptFeedback") or {}).get("blockReason")
    if block_reason:
        raise LLMError("Gemini blocked the prompt", reason=block_reason)
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise LLMError("Gemini returned no candidates", body=str(data)[:200]) from e
    return "".join(part.get("text", "") for part in parts).strip()


# --------------------------------------------------------------------------- #
#  Back-end: OpenAI
# --------------------------------------------------------------------------- #
def _call_openai(
    prompt: str, model: str, config: Settings, timeout: float, temperature: float
) -> str:
    if not config.openai_api_key:
        raise LLMError("OPENAI_API_KEY env var missing")

    client = openai.OpenAI(api_key=config.openai_api_key, timeout=timeout, max_retries=0)
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
    except openai.APITimeoutError as e:
        raise LLMError("OpenAI request timed out", timeout=timeout) from e
    except openai.RateLimitError as e:
        raise LLMError("OpenAI rate limit exceeded", status=429) from e
    except openai.OpenAIError as e:
        raise LLMError("OpenAI request failed", error=str(e)) from e
    return (resp.choices[0].message.content or "").strip()


# --------------------------------------------------------------------------- #
#  Back-end: Ollama
# --------------------------------------------------------------------------- #
def _call_ollama(
    prompt: str, model: str, config: Settings, timeout: float, temperature: float
) -> str:
    endpoint = f"{config.ollama_url.rstrip('/')}/v1/chat/completions"
    payload = {
        "model": model,
        "temperature": temperature,
        "messages": [{"role": "user", "content": prompt}],
    }

    data = _post_json("Ollama", endpoint, payload, timeout)
    try:
        return (data["choices"][0]["message"]["content"] or "").strip()
    except (KeyError, IndexError, TypeError) as e:
        raise LLMError("Ollama returned no choices", body=str(data)[:200]) from e
