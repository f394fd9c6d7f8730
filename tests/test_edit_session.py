import asyncio

import pytest

from agents.models import LoadingState
from editing import EditSession
from pipeline import GenerationOrchestrator
from utils.errors import InvalidTransitionError, SessionBusyError

from .conftest import GatedSynthesizer


@pytest.fixture
async def ready_session(video_url, fake_spec_stage, fake_code_stage):
    session = GenerationOrchestrator(
        content_basis=video_url,
        spec_synthesizer=fake_spec_stage,
        code_synthesizer=fake_code_stage
    )
    await session.start()
    return session


class TestEditSession:

    @pytest.mark.asyncio
    async def test_begin_copies_committed_spec(self, ready_session):
        edit = EditSession(ready_session)
        assert edit.begin() == "SPEC"
        assert edit.is_editing

    @pytest.mark.asyncio
    async def test_draft_changes_trigger_nothing(self, ready_session, fake_code_stage):
        edit = EditSession(ready_session)
        edit.begin()
        edit.update("A brand new game")

        assert ready_session.spec == "SPEC"
        assert fake_code_stage.synthesize.await_count == 1

    @pytest.mark.asyncio
    async def test_discard_leaves_session_untouched(self, ready_session):
        edit = EditSession(ready_session)
        edit.begin()
        edit.update("Throw this away")
        edit.discard()

        assert not edit.is_editing
        assert ready_session.spec == "SPEC"
        assert ready_session.code == "<html>CODE</html>"

    @pytest.mark.asyncio
    async def test_commit_regenerates_code(self, ready_session, fake_code_stage):
        edit = EditSession(ready_session)
        edit.begin()
        edit.update("A brand new game")

        snapshot = await edit.commit()

        assert not edit.is_editing
        assert snapshot.spec == "A brand new game"
        assert snapshot.state == LoadingState.READY
        fake_code_stage.synthesize.assert_awaited_with("A brand new game")

    @pytest.mark.asyncio
    async def test_commit_without_begin(self, ready_session):
        with pytest.raises(InvalidTransitionError):
            await EditSession(ready_session).commit()

    def test_update_without_begin(self, fake_spec_stage, fake_code_stage, video_url):
        session = GenerationOrchestrator(video_url, fake_spec_stage, fake_code_stage)
        with pytest.raises(InvalidTransitionError):
            EditSession(session).update("text")

    @pytest.mark.asyncio
    async def test_busy_commit_keeps_draft(self, video_url, fake_spec_stage):
        code_stage = GatedSynthesizer("<html/>")
        code_stage.gate.set()
        session = GenerationOrchestrator(video_url, fake_spec_stage, code_stage)
        await session.start()

        code_stage.gate.clear()
        task = asyncio.create_task(session.regenerate_code_from_edited_spec("First edit"))
        await asyncio.sleep(0)

        edit = EditSession(session)
        edit.begin()
        edit.update("Second edit")
        with pytest.raises(SessionBusyError):
            await edit.commit()
        assert edit.draft == "Second edit"

        code_stage.gate.set()
        await task
        assert session.spec == "First edit"
