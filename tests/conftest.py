"""
Pytest configuration for the generator test suite.

Async tests run through pytest-asyncio (asyncio_mode = "auto" in pyproject.toml).
No test talks to the network: the model service is always faked.
"""
import asyncio
import json
from unittest.mock import AsyncMock, Mock

import pytest

from agents.code_synthesizer import CodeSynthesizer
from agents.spec_synthesizer import SpecSynthesizer

VIDEO_URL = "https://www.youtube.com/watch?v=abc123def45"


class GatedSynthesizer:
    """Synthesizer fake whose calls block until the test opens the gate"""

    def __init__(self, result):
        self.result = result
        self.calls = []
        self.gate = asyncio.Event()

    async def synthesize(self, arg):
        self.calls.append(arg)
        await self.gate.wait()
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def video_url():
    return VIDEO_URL


@pytest.fixture
def mock_service():
    """Text generation service returning a spec response, then a code response"""
    service = Mock()
    service.generate = AsyncMock(side_effect=[
        json.dumps({"spec": "Count the ducks"}),
        "Here you go:\n```html<html><body>Ducks!</body></html>```\nEnjoy",
    ])
    return service


@pytest.fixture
def spec_synthesizer(mock_service):
    return SpecSynthesizer(service=mock_service, model="gemini-2.5-flash")


@pytest.fixture
def code_synthesizer(mock_service):
    return CodeSynthesizer(service=mock_service, model="gemini-2.5-flash")


@pytest.fixture
def fake_spec_stage():
    stage = Mock()
    stage.synthesize = AsyncMock(return_value="SPEC")
    return stage


@pytest.fixture
def fake_code_stage():
    stage = Mock()
    stage.synthesize = AsyncMock(return_value="<html>CODE</html>")
    return stage
