import asyncio
import logging
from typing import Callable, List, Optional

from config import settings
from agents.base import BaseSynthesizer
from agents.spec_synthesizer import SpecSynthesizer
from agents.code_synthesizer import CodeSynthesizer
from agents.models import LoadingState, SessionError, SessionSnapshot
from generation.text_generation import TextGenerationService
from utils.errors import (
    InvalidTransitionError,
    SessionAbandonedError,
    SessionBusyError,
    friendly_error_message,
)
from utils.examples import ExampleLibrary
from utils.validators import PipelineValidator

SnapshotListener = Callable[[SessionSnapshot], None]
BusyListener = Callable[[bool], None]


class GenerationOrchestrator:
    """
    Owns one generation session: the content basis, the committed spec and code,
    the loading state and the last error.

    Runs the spec stage then the code stage, and lets an edited spec re-run only
    the code stage. Every update is pushed to subscribers as a SessionSnapshot.
    Each run is tagged with a generation id; results that arrive after the
    session was abandoned are dropped.
    """

    def __init__(
        self,
        content_basis: str,
        spec_synthesizer: BaseSynthesizer,
        code_synthesizer: BaseSynthesizer,
        preseeded_spec: Optional[str] = None,
        preseeded_code: Optional[str] = None
    ):
        self.content_basis = content_basis
        self.spec_synthesizer = spec_synthesizer
        self.code_synthesizer = code_synthesizer

        self._preseeded_spec = preseeded_spec
        self._preseeded_code = preseeded_code

        self._spec = preseeded_spec or ""
        self._code = preseeded_code or ""
        self._state = LoadingState.READY if self.is_preseeded else LoadingState.LOADING_SPEC
        self._error: Optional[SessionError] = None

        self._generation_id = 0
        self._in_flight = False
        self._abandoned = False
        self._last_busy: Optional[bool] = None

        self._listeners: List[SnapshotListener] = []
        self._busy_listeners: List[BusyListener] = []

        self.logger = logging.getLogger(self.__class__.__name__)

    # Read-only view

    @property
    def is_preseeded(self) -> bool:
        return bool(self._preseeded_spec and self._preseeded_code)

    @property
    def state(self) -> LoadingState:
        return self._state

    @property
    def spec(self) -> str:
        return self._spec

    @property
    def code(self) -> str:
        return self._code

    @property
    def error(self) -> Optional[SessionError]:
        return self._error

    @property
    def busy(self) -> bool:
        return self._state.is_busy

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def abandoned(self) -> bool:
        return self._abandoned

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            content_basis=self.content_basis,
            spec=self._spec,
            code=self._code,
            state=self._state,
            error=self._error,
            busy=self.busy,
            generation_id=self._generation_id
        )

    # Subscriptions

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener called with a snapshot on every update"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_busy_change(self, listener: BusyListener) -> Callable[[], None]:
        """Register a listener called whenever the derived busy flag flips"""
        self._busy_listeners.append(listener)

        def unsubscribe():
            if listener in self._busy_listeners:
                self._busy_listeners.remove(listener)

        return unsubscribe

    # Transitions

    async def start(self) -> SessionSnapshot:
        """
        Run the full pipeline: spec stage, then code stage

        Pre-seeded sessions go straight to READY without calling the model.

        Returns:
            Snapshot after the run settles

        Raises:
            SessionBusyError: If a generation task is already in flight
            SessionAbandonedError: If the session was abandoned
        """
        self._admit()

        if self.is_preseeded:
            self.logger.info("Pre-seeded session, skipping generation")
            self._update(
                spec=self._preseeded_spec,
                code=self._preseeded_code,
                error=None,
                state=LoadingState.READY
            )
            return self.snapshot()

        run_id = self._begin()
        try:
            self.logger.info(f"Starting generation #{run_id} for: {self.content_basis}")
            self._update(spec="", code="", error=None, state=LoadingState.LOADING_SPEC)

            try:
                spec = await self.spec_synthesizer.synthesize(self.content_basis)
            except Exception as e:
                if self._is_current(run_id):
                    self._fail("spec", e)
                return self.snapshot()

            if not self._is_current(run_id):
                self.logger.info(f"Discarding spec from abandoned generation #{run_id}")
                return self.snapshot()

            self._update(spec=spec, state=LoadingState.LOADING_CODE)
            await self._generate_code(run_id)
        finally:
            self._finish(run_id)

        return self.snapshot()

    async def retry(self) -> SessionSnapshot:
        """Re-run the pipeline from scratch, clearing the previous error"""
        self.logger.info("Retrying generation")
        return await self.start()

    def ensure_editable(self):
        """Raise unless an edited spec could be committed right now"""
        self._admit()
        if self._state not in (LoadingState.READY, LoadingState.ERROR):
            raise InvalidTransitionError(
                f"Cannot regenerate code from an edited spec while {self._state.value}"
            )

    async def regenerate_code_from_edited_spec(self, new_spec_text: str) -> SessionSnapshot:
        """
        Commit an edited spec and re-run only the code stage

        An edit that only differs from the committed spec in surrounding
        whitespace is a no-op.

        Raises:
            SessionBusyError: If a generation task is already in flight
            InvalidTransitionError: If the session is not READY or ERROR
            SessionAbandonedError: If the session was abandoned
        """
        self.ensure_editable()

        if new_spec_text.strip() == self._spec.strip():
            self.logger.info("Edited spec unchanged, skipping regeneration")
            return self.snapshot()

        run_id = self._begin()
        try:
            self.logger.info(f"Regenerating code from edited spec (generation #{run_id})")
            self._update(spec=new_spec_text, code="", error=None, state=LoadingState.LOADING_CODE)
            await self._generate_code(run_id)
        finally:
            self._finish(run_id)

        return self.snapshot()

    def update_code(self, code: str) -> SessionSnapshot:
        """Replace the code with a user edit; only allowed once READY"""
        self._admit()
        if self._state != LoadingState.READY:
            raise InvalidTransitionError(f"Cannot edit code while {self._state.value}")

        self._update(code=code)
        return self.snapshot()

    def abandon(self):
        """Drop the session; results of in-flight calls are discarded on arrival"""
        if self._abandoned:
            return

        self._abandoned = True
        self._generation_id += 1
        self._in_flight = False
        self._listeners.clear()
        self._busy_listeners.clear()
        self.logger.info(f"Session abandoned: {self.content_basis}")

    # Internals

    def _admit(self):
        if self._abandoned:
            raise SessionAbandonedError("Session was abandoned")
        if self._in_flight:
            raise SessionBusyError("A generation is already in progress for this session")

    def _begin(self) -> int:
        self._generation_id += 1
        self._in_flight = True
        return self._generation_id

    def _finish(self, run_id: int):
        if not self._is_current(run_id):
            return

        self._in_flight = False

        # A run that ends while still loading was cancelled before it could settle
        if self.busy:
            stage = "spec" if self._state == LoadingState.LOADING_SPEC else "code"
            self._fail(stage, asyncio.CancelledError(f"Generation #{run_id} was cancelled"))

    def _is_current(self, run_id: int) -> bool:
        return not self._abandoned and run_id == self._generation_id

    async def _generate_code(self, run_id: int):
        # Read the spec at call time so an edit always uses the latest commit
        spec = self._spec

        try:
            code = await self.code_synthesizer.synthesize(spec)
        except Exception as e:
            if self._is_current(run_id):
                self._fail("code", e)
            return

        if not self._is_current(run_id):
            self.logger.info(f"Discarding code from abandoned generation #{run_id}")
            return

        self._update(code=code, state=LoadingState.READY)
        self.logger.info(f"Generation #{run_id} ready")

    def _fail(self, stage: str, error: BaseException):
        self.logger.error(f"{stage.capitalize()} generation failed: {error}")
        self._update(
            code="",
            error=SessionError(
                stage=stage,
                message=friendly_error_message(error),
                detail=str(error) or error.__class__.__name__,
                error_type=error.__class__.__name__
            ),
            state=LoadingState.ERROR
        )

    def _update(self, **changes):
        for name, value in changes.items():
            setattr(self, f"_{name}", value)

        snapshot = self.snapshot()
        for listener in list(self._listeners):
            self._notify(listener, snapshot)

        busy = self.busy
        if busy != self._last_busy:
            self._last_busy = busy
            for listener in list(self._busy_listeners):
                self._notify(listener, busy)

    def _notify(self, listener: Callable, value):
        try:
            listener(value)
        except Exception as e:
            self.logger.warning(f"Listener {listener!r} failed: {e}")


class Pipeline:
    """
    Main entry point for video-to-game generation
    Wires the spec and code stages from settings and opens one session per video
    """

    def __init__(
        self,
        text_service: Optional[TextGenerationService] = None,
        examples: Optional[ExampleLibrary] = None
    ):
        self.config = settings
        self._setup_logging()

        if text_service is None:
            text_service = TextGenerationService(
                api_key=PipelineValidator.validate_api_key(settings.google_api_key, "Google"),
                video_mime_type=settings.video_mime_type
            )
        self.text_service = text_service

        self.spec_synthesizer = SpecSynthesizer(
            service=text_service,
            model=settings.spec_model,
            temperature=settings.generation_temperature
        )
        self.code_synthesizer = CodeSynthesizer(
            service=text_service,
            model=settings.code_model,
            temperature=settings.generation_temperature
        )

        self.examples = examples if examples is not None else ExampleLibrary.load(settings.examples_path)

        self.logger.info(f"Pipeline initialized with {len(self.examples)} examples")

    def _setup_logging(self):
        """Configure logging for pipeline"""
        logging.basicConfig(
            level=getattr(logging, self.config.log_level.upper(), logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.FileHandler(self.config.log_file),
                logging.StreamHandler()
            ]
        )
        self.logger = logging.getLogger("Pipeline")

    def open_session(
        self,
        content_basis: str,
        preseeded_spec: Optional[str] = None,
        preseeded_code: Optional[str] = None,
        replacing: Optional[GenerationOrchestrator] = None
    ) -> GenerationOrchestrator:
        """
        Create a brand-new session for a video, abandoning the one it replaces

        A video that matches a known example is pre-seeded with its spec and code
        unless spec and code are supplied explicitly.
        """
        content_basis = PipelineValidator.validate_content_basis(content_basis)

        if replacing is not None:
            replacing.abandon()

        if preseeded_spec is None and preseeded_code is None:
            example = self.examples.find(content_basis)
            if example is not None:
                self.logger.info(f"Using pre-seeded example: {example.title}")
                preseeded_spec, preseeded_code = example.spec, example.code

        session = GenerationOrchestrator(
            content_basis=content_basis,
            spec_synthesizer=self.spec_synthesizer,
            code_synthesizer=self.code_synthesizer,
            preseeded_spec=preseeded_spec,
            preseeded_code=preseeded_code
        )
        return session
