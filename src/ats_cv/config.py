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
Runtime configuration, read from the environment.

API key lookup order: GEMINI_API_KEY, API_KEY, OPENAI_API_KEY.

CA bundle lookup order (for proxy environments):
  1. Explicit override via --ca-bundle CLI arg
  2. REQUESTS_CA_BUNDLE environment variable
  3. CURL_CA_BUNDLE environment variable
  4. SSL_CERT_FILE environment variable
  5. System defaults
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-pro",
    "openai": "gpt-4o-mini",
}

API_KEY_VARS = ("GEMINI_API_KEY", "API_KEY", "OPENAI_API_KEY")
CA_BUNDLE_VARS = ("REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE")


def resolve_ca_bundle(override: Optional[str] = None) -> Optional[str]:
    """
    Returns the CA bundle path to use for outbound HTTPS, or None for
    the system/certifi trust store.
    """
    if override:
        return override
    for var in CA_BUNDLE_VARS:
        value = os.environ.get(var)
        if value:
            logger.debug(f"Using CA bundle from {var}: {value}")
            return value
    return None


def configure_ssl_env(bundle: Optional[str]) -> None:
    """
    Exports a custom CA bundle as SSL_CERT_FILE, which the httpx-based
    SDKs (google-genai, openai) read directly.
    """
    if bundle and os.environ.get("SSL_CERT_FILE") != bundle:
        os.environ["SSL_CERT_FILE"] = bundle
        logger.debug(f"Set SSL_CERT_FILE={bundle} for SDK clients")


def _infer_provider(api_key: Optional[str]) -> str:
    if api_key and api_key.startswith("sk-"):
        return "openai"
    return "gemini"


@dataclass
class AppConfig:
    """Settings for the AI gateway and local data directory."""
    api_key: Optional[str] = None
    provider: str = "gemini"
    model: str = DEFAULT_MODELS["gemini"]
    home: Path = field(default_factory=lambda: Path("user_content"))
    ca_bundle: Optional[str] = None

    @classmethod
    def from_env(cls, home: Optional[str] = None, ca_bundle: Optional[str] = None) -> "AppConfig":
        api_key = None
        for var in API_KEY_VARS:
            if os.environ.get(var):
                api_key = os.environ[var]
                break
        if not api_key:
            logger.warning("No API key found. AI features will fail until one is configured.")

        provider = (os.environ.get("ATS_CV_PROVIDER") or _infer_provider(api_key)).lower()
        if provider not in DEFAULT_MODELS:
            logger.warning(f"Unknown provider '{provider}', using gemini.")
            provider = "gemini"

        return cls(
            api_key=api_key,
            provider=provider,
            model=os.environ.get("ATS_CV_MODEL") or DEFAULT_MODELS[provider],
            home=Path(home or os.environ.get("ATS_CV_HOME") or "user_content"),
            ca_bundle=resolve_ca_bundle(ca_bundle),
        )

    @property
    def store_path(self) -> Path:
        return self.home / "store.json"

    @property
    def log_dir(self) -> Path:
        return self.home / "logs"

    @property
    def export_dir(self) -> Path:
        return self.home / "exports"
