import logging
from typing import Optional

from agents.models import SessionSnapshot
from pipeline import GenerationOrchestrator
from utils.errors import InvalidTransitionError


class EditSession:
    """
    Draft copy of a session's spec while the user edits it

    Nothing is generated until commit(); discard() leaves the committed spec
    and code untouched.
    """

    def __init__(self, orchestrator: GenerationOrchestrator):
        self.orchestrator = orchestrator
        self.draft: Optional[str] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_editing(self) -> bool:
        return self.draft is not None

    def begin(self) -> str:
        """Start editing from the committed spec"""
        self.draft = self.orchestrator.spec
        return self.draft

    def update(self, text: str):
        if not self.is_editing:
            raise InvalidTransitionError("No edit in progress")
        self.draft = text

    def discard(self):
        self.draft = None

    async def commit(self) -> SessionSnapshot:
        """
        Submit the draft and regenerate code from it

        The draft is kept if the session cannot take the edit right now
        (busy, wrong state or abandoned).
        """
        if not self.is_editing:
            raise InvalidTransitionError("No edit in progress")

        self.orchestrator.ensure_editable()

        text = self.draft
        self.draft = None
        self.logger.info(f"Committing edited spec ({len(text)} chars)")
        return await self.orchestrator.regenerate_code_from_edited_spec(text)
