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
Runtime configuration: AI endpoint settings, CA bundle resolution and the
length thresholds used when merging model output with the offline engine.

Everything is read from the process environment; there is no config file.
"""

import os
import logging
from dataclasses import dataclass

from bilim_match.models import ResumeFlow

logger = logging.getLogger(__name__)

# A profile "about" text at least this long is used verbatim as the summary.
ABOUT_MIN_CHARS = 40

# Minimum trimmed length for a model-drafted summary to be accepted.
SUMMARY_MIN_CHARS_ONLINE = 140
SUMMARY_MIN_CHARS_STRUCTURED = 360

DEFAULT_BASE_URL = "http://127.0.0.1:1234/v1"
DEFAULT_OPENAI_MODEL = "local-model"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
LOCAL_API_KEY = "lm-studio"

# Module-level override set by the CLI --ca-bundle flag
_ca_bundle_override: str | None = None


def summary_threshold(flow: ResumeFlow) -> int:
    """Minimum draft summary length for the given call path."""
    if flow == ResumeFlow.STRUCTURED:
        return SUMMARY_MIN_CHARS_STRUCTURED
    return SUMMARY_MIN_CHARS_ONLINE


def _is_local_like(url: str) -> bool:
    return (
        url.startswith("http://127.0.0.1")
        or url.startswith("http://localhost")
        or ".ngrok" in url
    )


def normalize_base_url(raw_base_url: str | None) -> str:
    """
    Trims trailing slashes and appends /v1 for local (LM Studio style) and
    ngrok endpoints that were configured without it.
    """
    trimmed = (raw_base_url or "").strip().rstrip("/")
    if not trimmed:
        return DEFAULT_BASE_URL

    if _is_local_like(trimmed) and not trimmed.endswith("/v1"):
        return f"{trimmed}/v1"
    return trimmed


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Resolved AI endpoint settings."""
    provider: str
    base_url: str
    model: str
    api_key: str
    gemini_api_key: str
    timeout: float
    disabled: bool

    @classmethod
    def from_env(cls) -> "Settings":
        gemini_key = os.environ.get("GEMINI_API_KEY", "").strip()

        provider = os.environ.get("BILIM_AI_PROVIDER", "").strip().lower()
        if provider not in ("openai", "gemini"):
            if provider:
                logger.warning(f"Unknown AI provider '{provider}'. Falling back to auto-detection.")
            provider = "gemini" if gemini_key else "openai"

        base_url = normalize_base_url(os.environ.get("BILIM_AI_BASE_URL"))

        default_model = DEFAULT_GEMINI_MODEL if provider == "gemini" else DEFAULT_OPENAI_MODEL
        model = os.environ.get("BILIM_AI_MODEL", "").strip() or default_model

        api_key = (os.environ.get("BILIM_AI_API_KEY") or os.environ.get("OPENAI_API_KEY") or "").strip()
        if not api_key and _is_local_like(base_url):
            api_key = LOCAL_API_KEY

        try:
            timeout = float(os.environ.get("BILIM_AI_TIMEOUT", "30"))
        except ValueError:
            logger.warning("Invalid BILIM_AI_TIMEOUT. Using 30 seconds.")
            timeout = 30.0

        return cls(
            provider=provider,
            base_url=base_url,
            model=model,
            api_key=api_key,
            gemini_api_key=gemini_key,
            timeout=timeout,
            disabled=_env_flag("BILIM_AI_DISABLED"),
        )


def set_ca_bundle_override(path: str) -> None:
    """Set an explicit CA bundle path from a CLI argument."""
    global _ca_bundle_override
    _ca_bundle_override = path
    logger.info(f"CA bundle override set to: {path}")


def get_ca_bundle() -> str | bool:
    """
    Resolve the CA bundle for outbound HTTPS requests.

    Priority: --ca-bundle override, REQUESTS_CA_BUNDLE, CURL_CA_BUNDLE,
    SSL_CERT_FILE, then True (system/certifi trust store).
    """
    if _ca_bundle_override:
        return _ca_bundle_override

    for var in ("REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE"):
        value = os.environ.get(var)
        if value:
            logger.debug(f"Using CA bundle from {var}: {value}")
            return value

    return True


def configure_ssl_env() -> None:
    """
    Exports a custom CA bundle as SSL_CERT_FILE so the httpx-based SDKs
    (OpenAI, Google GenAI) pick it up.
    """
    bundle = get_ca_bundle()
    if isinstance(bundle, str) and os.environ.get("SSL_CERT_FILE") != bundle:
        os.environ["SSL_CERT_FILE"] = bundle
        logger.debug(f"Set SSL_CERT_FILE={bundle} for SDK clients")
