"""
Shared fixtures: a scripted gateway and a stub credential provider
"""
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.credentials import CredentialProvider


class FakeGateway:
    """
    Records every call and answers from scripted replies.

    score_replies maps a property-identifying substring of the prompt to the
    raw reply (or an exception to raise); the first matching key wins.
    """

    def __init__(self, score_replies=None, chat_reply="", chat_error=None, default_score="(A)"):
        self.score_replies = score_replies or {}
        self.chat_reply = chat_reply
        self.chat_error = chat_error
        self.default_score = default_score
        self.score_calls = []
        self.chat_calls = []

    @property
    def call_count(self) -> int:
        return len(self.score_calls) + len(self.chat_calls)

    async def score(self, prompt: str) -> str:
        self.score_calls.append(prompt)
        for needle, reply in self.score_replies.items():
            if needle in prompt:
                if isinstance(reply, Exception):
                    raise reply
                return reply
        return self.default_score

    async def chat(self, turns) -> str:
        self.chat_calls.append(list(turns))
        if self.chat_error is not None:
            raise self.chat_error
        return self.chat_reply


class StubCredentials(CredentialProvider):
    def __init__(self, token: str = "test-token"):
        self.token = token
        self.calls = 0

    async def get_access_token(self) -> str:
        self.calls += 1
        return self.token


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def stub_credentials():
    return StubCredentials()


ASPIRIN = "CC(=O)Oc1ccccc1C(=O)O"
CAFFEINE = "Cn1c(=O)c2c(ncn2C)n(c1=O)C"
UNCACHED = "CCO"
