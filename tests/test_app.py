import importlib

import pytest

from agents.models import LoadingState, SessionError, SessionSnapshot
from pipeline import GenerationOrchestrator

from .conftest import GatedSynthesizer


@pytest.fixture
def app(monkeypatch):
    """Import the Gradio host with a placeholder key; no request is ever sent"""
    from config import settings
    monkeypatch.setattr(settings, "google_api_key", "test-key-0123456789")
    return importlib.import_module("app")


class TestStream:

    @pytest.mark.asyncio
    async def test_renders_every_snapshot_then_final_state(self, app, video_url, fake_spec_stage, fake_code_stage):
        session = GenerationOrchestrator(video_url, fake_spec_stage, fake_code_stage)

        updates = [update async for update in app.stream(session, session.start())]

        assert all(update[0] is session for update in updates)
        assert updates[0][1] == f"**{app.LOADING_MESSAGES[LoadingState.LOADING_SPEC]}**"
        assert updates[-1][1] == "**Your game is ready!**"
        assert 'sandbox="allow-scripts"' in updates[-1][2]

    @pytest.mark.asyncio
    async def test_abandoned_session_is_not_rendered(self, app, video_url, fake_code_stage):
        spec_stage = GatedSynthesizer("SPEC")
        session = GenerationOrchestrator(video_url, spec_stage, fake_code_stage)
        updates = app.stream(session, session.start())

        first = await updates.__anext__()
        assert first[0] is session

        session.abandon()
        spec_stage.gate.set()

        assert [update async for update in updates] == []
        fake_code_stage.synthesize.assert_not_awaited()

    def test_error_status_escapes_detail(self, app, video_url, fake_spec_stage, fake_code_stage):
        snapshot = SessionSnapshot(
            content_basis=video_url,
            state=LoadingState.ERROR,
            error=SessionError(stage="code", message="Oops", detail="<b>bad</b>", error_type="ParseError"),
            busy=False,
            generation_id=1
        )

        status = app.render_status(snapshot)

        assert "Oops" in status
        assert "&lt;b&gt;bad&lt;/b&gt;" in status
        assert app.render_game(snapshot) == ""
