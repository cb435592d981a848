"""content.providers

Chat-completion providers and a small factory.
"""

from __future__ import annotations

from .base import ChatProvider, NullProvider, ProviderError, ProviderStatus


def get_provider(name: str, *, gemini_keys: str = "", grok_key: str = "", timeout_s: float = 20.0) -> ChatProvider:
    """Build the provider named `name` (gemini | grok | none)."""
    name = str(name or "").strip().lower()

    if name == "gemini":
        if not gemini_keys:
            return NullProvider("missing GEMINI_API_KEY")
        from .gemini import GeminiProvider

        return GeminiProvider.from_api_key_string(gemini_keys, timeout_s=float(timeout_s))

    if name == "grok":
        if not grok_key:
            return NullProvider("missing GROK_API_KEY")
        from .grok import GrokProvider

        return GrokProvider(grok_key, timeout_s=float(timeout_s))

    return NullProvider()


__all__ = ["ChatProvider", "NullProvider", "ProviderError", "ProviderStatus", "get_provider"]
