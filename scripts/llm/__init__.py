"""
LLM module for merch generation.

Provides the shared Claude client and status-tagged result types.
"""

from .claude_client import (
    ClaudeClient,
    CallStatus,
    LLMResponse,
    ToolCallResult,
    extract_json_text,
    create_claude_client
)

__all__ = [
    "ClaudeClient",
    "CallStatus",
    "LLMResponse",
    "ToolCallResult",
    "extract_json_text",
    "create_claude_client"
]
