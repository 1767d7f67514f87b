# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Gateway for every call to the remote text-generation service.
Supports Google AI Studio (Gemini) and OpenAI.

All retries, backoff and response validation live here. Callers either get
a validated result or an exception; never a partial result.
"""

import json
import time
import logging
from typing import Any, Callable, Optional

from ats_cv.config import AppConfig, configure_ssl_env
from ats_cv.errors import ConfigurationError, ServiceUnavailableError, TransientAIError

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
INITIAL_DELAY = 1.0  # seconds; doubled after every failed attempt

# transport(prompt, schema) -> raw response text
Transport = Callable[[str, Optional[dict]], Optional[str]]


def clean_json(text: str) -> str:
    """Strips markdown code fences some models wrap around JSON."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]
    return text.strip()


def check_shape(value: Any, schema: dict, path: str = "$") -> None:
    """
    Checks parsed JSON against a shape descriptor (the OpenAPI subset
    Gemini accepts: type, properties, required, items).
    Raises TransientAIError on the first mismatch.
    """
    kind = str(schema.get("type", "")).upper()
    if kind == "OBJECT":
        if not isinstance(value, dict):
            raise TransientAIError(f"malformed response: {path} is not an object")
        for key in schema.get("required", []):
            if key not in value or value[key] is None:
                raise TransientAIError(f"malformed response: {path}.{key} is missing")
        for key, sub_schema in schema.get("properties", {}).items():
            if value.get(key) is not None:
                check_shape(value[key], sub_schema, f"{path}.{key}")
    elif kind == "ARRAY":
        if not isinstance(value, list):
            raise TransientAIError(f"malformed response: {path} is not an array")
        items = schema.get("items")
        if items:
            for i, item in enumerate(value):
                check_shape(item, items, f"{path}[{i}]")
    elif kind == "STRING":
        if not isinstance(value, str):
            raise TransientAIError(f"malformed response: {path} is not a string")


def parse_structured(text: str, schema: dict) -> Any:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Only unwrap fences when the raw text is not already JSON;
        # string values may contain ``` themselves.
        try:
            data = json.loads(clean_json(text))
        except json.JSONDecodeError as e:
            raise TransientAIError(f"malformed response: invalid JSON ({e})") from e
    check_shape(data, schema)
    return data


class LLMClient:
    """
    Single chokepoint for the generative text service.

    `transport` and `sleep` are injectable so tests can replace the
    network and the clock.
    """
    def __init__(self, config: AppConfig, transport: Optional[Transport] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self._transport = transport or self._call_llm
        self._sleep = sleep
        self._client = None

    def invoke(self, prompt: str, schema: Optional[dict] = None) -> Any:
        """
        Sends `prompt` and returns the response text, or the parsed JSON
        object when a `schema` is given.

        Raises:
            ValueError: empty prompt.
            ConfigurationError: no API key configured (never retried).
            ServiceUnavailableError: every attempt failed.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")
        if not self.config.api_key:
            raise ConfigurationError(
                "API key is not configured for this application. "
                "Set GEMINI_API_KEY (or OPENAI_API_KEY) and try again."
            )

        last_error = None
        for attempt in range(MAX_RETRIES):
            try:
                return self._attempt(prompt, schema)
            except ConfigurationError:
                raise
            except Exception as e:
                last_error = e
                logger.warning(f"AI request failed (attempt {attempt + 1}/{MAX_RETRIES}): {e}")
                if attempt < MAX_RETRIES - 1:
                    delay = INITIAL_DELAY * (2 ** attempt)
                    logger.info(f"    > Retrying in {delay:.0f}s...")
                    self._sleep(delay)

        logger.error(f"AI service unavailable after {MAX_RETRIES} attempts: {last_error}")
        raise ServiceUnavailableError(MAX_RETRIES, last_error) from last_error

    def _attempt(self, prompt: str, schema: Optional[dict]) -> Any:
        text = self._transport(prompt, schema)
        if not text or not text.strip():
            raise TransientAIError("Invalid response: empty response text.")
        if schema is not None:
            return parse_structured(text, schema)
        return text

    def _call_llm(self, prompt: str, schema: Optional[dict]) -> Optional[str]:
        """One round-trip to the configured provider."""
        # Ensure custom CA bundle is visible to httpx-based SDKs
        configure_ssl_env(self.config.ca_bundle)

        if self.config.provider == "openai":
            return self._call_openai(prompt, schema)
        return self._call_gemini(prompt, schema)

    def _call_gemini(self, prompt: str, schema: Optional[dict]) -> Optional[str]:
        try:
            from google import genai
            from google.genai import types
        except ImportError as e:
            raise ConfigurationError(f"google-genai is not installed: {e}") from e

        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)

        config = None
        if schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            )
        logger.debug(f"Calling Gemini model {self.config.model}")
        response = self._client.models.generate_content(
            model=self.config.model,
            contents=prompt,
            config=config,
        )
        return response.text

    def _call_openai(self, prompt: str, schema: Optional[dict]) -> Optional[str]:
        try:
            import openai
        except ImportError as e:
            raise ConfigurationError(f"openai is not installed: {e}") from e

        if self._client is None:
            self._client = openai.OpenAI(api_key=self.config.api_key)

        kwargs = {}
        if schema is not None:
            # OpenAI JSON mode has no schema parameter; describe it in the prompt
            prompt = f"{prompt}\n\nReturn a JSON object matching this schema:\n{json.dumps(schema)}"
            kwargs["response_format"] = {"type": "json_object"}

        logger.debug(f"Calling OpenAI model {self.config.model}")
        response = self._client.chat.completions.create(
            model=self.config.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7,
            **kwargs,
        )
        return response.choices[0].message.content
