"""content.providers.base

Provider interfaces.

A provider's job is to answer a chat-style message list with raw text.
Parsing and validation happen in the engine, so providers stay tiny and
interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol


class ProviderError(RuntimeError):
    """Any failure of the external model call (network, auth, empty answer)."""


@dataclass(frozen=True)
class ProviderStatus:
    ok: bool
    backend: str
    model: str
    note: str = ""
    error: str = ""


class ChatProvider(Protocol):
    def status(self) -> ProviderStatus: ...

    async def complete(
        self,
        messages: List[Dict[str, str]],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_output_tokens: int = 400,
    ) -> str:
        """Return the raw text of the model answer or raise ProviderError."""
        ...


@dataclass
class NullProvider:
    """Stand-in when no API key is configured: every call fails."""

    reason: str = "no language model configured"

    def status(self) -> ProviderStatus:
        return ProviderStatus(False, "none", "", error=self.reason)

    async def complete(
        self,
        messages: List[Dict[str, str]],
        *,
        json_mode: bool = False,
        temperature: float = 0.7,
        max_output_tokens: int = 400,
    ) -> str:
        raise ProviderError(self.reason)


def split_messages(messages: List[Dict[str, str]]) -> tuple:
    """Return (system_text, user_text) for APIs without a role-tagged chat format."""
    system = "\n\n".join(str(m.get("content", "")) for m in messages if m.get("role") == "system")
    user = "\n\n".join(str(m.get("content", "")) for m in messages if m.get("role") != "system")
    return system.strip(), user.strip()
