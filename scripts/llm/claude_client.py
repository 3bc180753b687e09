"""
Claude Client for Merch Generation

Thin wrapper over the Anthropic SDK shared by every Claude collaborator
(niche discovery, phrase generation, cross-pollination, brief compliance).

Every call returns a result object tagged with a CallStatus instead of
raising, so callers can branch to their deterministic fallback:

- UNAVAILABLE: no API key configured, no request was made
- CALL_FAILURE: network/API error
- PARSE_ERROR: response arrived but not in the expected shape
- OK: payload is valid

Usage:
    from llm.claude_client import create_claude_client

    claude = create_claude_client()
    response = claude.complete("Suggest one niche", max_tokens=200)
    if response.ok:
        print(response.text)
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv(Path.home() / ".env")

import anthropic

logger = logging.getLogger(__name__)


class CallStatus(Enum):
    """Outcome of a collaborator call."""
    OK = "ok"
    UNAVAILABLE = "unavailable"
    CALL_FAILURE = "call_failure"
    PARSE_ERROR = "parse_error"


@dataclass
class LLMResponse:
    """Plain-text completion result."""
    status: CallStatus
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CallStatus.OK


@dataclass
class ToolCallResult:
    """Structured (tool-use) completion result."""
    status: CallStatus
    input: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CallStatus.OK


def extract_json_text(content: str, expect: str = "object") -> Optional[Any]:
    """
    Parse JSON out of a model reply.

    Handles ```json fenced blocks and prose around the payload.

    Args:
        content: Raw reply text
        expect: "object" or "array"

    Returns:
        Parsed value of the expected type, or None
    """
    if not content:
        return None

    text = content.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]
    text = text.strip()

    expected_type = list if expect == "array" else dict
    try:
        parsed = json.loads(text)
        if isinstance(parsed, expected_type):
            return parsed
    except json.JSONDecodeError:
        pass

    pattern = r"\[[\s\S]*\]" if expect == "array" else r"\{[\s\S]*\}"
    match = re.search(pattern, text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group())
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, expected_type) else None


class ClaudeClient:
    """Anthropic Messages API wrapper with status-tagged results."""

    DEFAULT_MODEL = "claude-sonnet-4-5"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[Any] = None
    ):
        """
        Initialize Claude client.

        Args:
            api_key: Anthropic key (or ANTHROPIC_API_KEY / CLAUDE_API_KEY env var)
            model: Model name (or MERCH_CLAUDE_MODEL env var)
            client: Pre-built client exposing messages.create (tests)
        """
        self.api_key = (
            api_key
            or os.environ.get("ANTHROPIC_API_KEY")
            or os.environ.get("CLAUDE_API_KEY")
        )
        self.model = model or os.environ.get("MERCH_CLAUDE_MODEL") or self.DEFAULT_MODEL

        if client is not None:
            self._client = client
        elif self.api_key:
            self._client = anthropic.Anthropic(api_key=self.api_key)
        else:
            self._client = None
            logger.warning("ANTHROPIC_API_KEY not set; Claude collaborators will use fallbacks")

    @property
    def available(self) -> bool:
        return self._client is not None

    def complete(
        self,
        prompt: str,
        max_tokens: int = 1024,
        temperature: Optional[float] = None,
        system: Optional[str] = None
    ) -> LLMResponse:
        """Single-turn text completion."""
        if not self.available:
            return LLMResponse(status=CallStatus.UNAVAILABLE, error="Claude API key not configured")

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}]
        }
        if temperature is not None:
            kwargs["temperature"] = temperature
        if system:
            kwargs["system"] = system

        try:
            response = self._client.messages.create(**kwargs)
        except Exception as e:
            logger.warning("Claude completion failed: %s", e)
            return LLMResponse(status=CallStatus.CALL_FAILURE, error=str(e))

        text = "".join(
            getattr(block, "text", "")
            for block in (getattr(response, "content", None) or [])
            if getattr(block, "type", "text") == "text"
        ).strip()

        if not text:
            return LLMResponse(status=CallStatus.PARSE_ERROR, error="Empty response from Claude")
        return LLMResponse(status=CallStatus.OK, text=text)

    def call_tool(
        self,
        prompt: str,
        tool: Dict[str, Any],
        max_tokens: int = 2048
    ) -> ToolCallResult:
        """
        Force a single tool call and return its input payload.

        Args:
            prompt: User message
            tool: Tool definition (name, description, input_schema)
            max_tokens: Response budget
        """
        if not self.available:
            return ToolCallResult(status=CallStatus.UNAVAILABLE, error="Claude API key not configured")

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                tools=[tool],
                tool_choice={"type": "tool", "name": tool["name"]},
                messages=[{"role": "user", "content": prompt}]
            )
        except Exception as e:
            logger.warning("Claude tool call '%s' failed: %s", tool.get("name"), e)
            return ToolCallResult(status=CallStatus.CALL_FAILURE, error=str(e))

        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "tool_use" and getattr(block, "name", tool["name"]) == tool["name"]:
                payload = getattr(block, "input", None)
                if isinstance(payload, dict):
                    return ToolCallResult(status=CallStatus.OK, input=payload)

        return ToolCallResult(
            status=CallStatus.PARSE_ERROR,
            error=f"No {tool['name']} tool call in response"
        )


def create_claude_client(api_key: Optional[str] = None, model: Optional[str] = None) -> ClaudeClient:
    """Create Claude client from explicit arguments or the environment."""
    return ClaudeClient(api_key=api_key, model=model)
