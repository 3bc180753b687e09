"""
Shared fixtures: temporary SQLite files and a scripted Anthropic client.
"""

import os
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from llm.claude_client import ClaudeClient


class ScriptedMessages:
    """
    Stands in for anthropic.Anthropic().messages.

    Replies are consumed in order: a str becomes a text block, a dict
    becomes a tool_use block for the requested tool, an Exception is raised.
    """

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if not self.replies:
            raise RuntimeError("No scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            block = SimpleNamespace(type="tool_use", name=kwargs["tools"][0]["name"], input=reply)
        else:
            block = SimpleNamespace(type="text", text=reply)
        return SimpleNamespace(content=[block])


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        db_path = f.name
    yield db_path
    os.unlink(db_path)


@pytest.fixture
def scripted_claude():
    """Factory: ClaudeClient whose API replies are scripted."""
    def make(*replies):
        messages = ScriptedMessages(replies)
        return ClaudeClient(api_key="test-key", client=SimpleNamespace(messages=messages))
    return make


@pytest.fixture
def offline_claude():
    """ClaudeClient with no key and no client (every call is UNAVAILABLE)."""
    client = ClaudeClient(api_key=None, client=None)
    client._client = None
    return client
