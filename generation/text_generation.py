import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict

from utils.errors import (
    AbnormalFinishError,
    BlockedPromptError,
    GenerationError,
    NoCandidateError,
    SafetyFinishError,
)

SAFETY_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII", "IMAGE_SAFETY"}


class GenerationRequest(BaseModel):
    """A single call to the text generation model"""
    model_config = ConfigDict(arbitrary_types_allowed=True, protected_namespaces=())

    model_identifier: str
    prompt: str
    video_reference: Optional[str] = None
    temperature: float = 0.75
    safety_overrides: Optional[List[types.SafetySetting]] = None


def _reason_name(reason: Any) -> str:
    return getattr(reason, "name", None) or str(reason)


class TextGenerationService:
    """
    Text Generation Service: Stateless wrapper around Gemini generate_content
    that turns a GenerationRequest into raw text or a typed failure.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        video_mime_type: str = "video/mp4",
        client: Optional[genai.Client] = None
    ):
        self.video_mime_type = video_mime_type

        # Initialize Gemini client
        self.client = client or genai.Client(api_key=api_key)

        self.logger = logging.getLogger(self.__class__.__name__)

    def _build_contents(self, request: GenerationRequest) -> List[types.Content]:
        parts = [types.Part.from_text(text=request.prompt)]

        if request.video_reference:
            parts.append(
                types.Part.from_uri(
                    file_uri=request.video_reference,
                    mime_type=self.video_mime_type
                )
            )

        return [types.Content(role="user", parts=parts)]

    async def generate(self, request: GenerationRequest) -> str:
        """
        Send a multi-part request (text plus optional video) and return the candidate text

        Args:
            request: Model, prompt, optional video reference, temperature and safety settings

        Returns:
            Text of the first candidate

        Raises:
            BlockedPromptError: If the prompt itself was blocked
            NoCandidateError: If no candidate was returned
            SafetyFinishError: If the candidate finished for a safety reason
            AbnormalFinishError: If the candidate finished for any other non-normal reason
            GenerationError: If the call itself failed
        """
        contents = self._build_contents(request)
        config = types.GenerateContentConfig(
            temperature=request.temperature,
            safety_settings=request.safety_overrides
        )

        self.logger.info(
            f"Calling {request.model_identifier} "
            f"(video={'yes' if request.video_reference else 'no'}, prompt={len(request.prompt)} chars)"
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=request.model_identifier,
                contents=contents,
                config=config
            )
        except Exception as e:
            self.logger.error(f"Gemini API call failed: {e}")
            raise GenerationError(f"Gemini API call failed: {e}") from e

        return self._extract_text(response)

    def _extract_text(self, response: Any) -> str:
        """Check prompt feedback and finish reason before trusting the response text"""

        prompt_feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(prompt_feedback, "block_reason", None) if prompt_feedback else None
        if block_reason:
            raise BlockedPromptError(_reason_name(block_reason))

        candidates = getattr(response, "candidates", None)
        if not candidates:
            raise NoCandidateError("Content generation failed: No candidates returned.")

        finish_reason = getattr(candidates[0], "finish_reason", None)
        if finish_reason:
            reason = _reason_name(finish_reason)
            if reason in SAFETY_FINISH_REASONS:
                raise SafetyFinishError(reason)
            if reason != "STOP":
                raise AbnormalFinishError(reason)

        text = response.text or ""
        self.logger.info(f"Received {len(text)} chars from Gemini")
        return text
