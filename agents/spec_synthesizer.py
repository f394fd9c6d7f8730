from agents.base import BaseSynthesizer
from generation.prompts import SPEC_FROM_VIDEO_PROMPT, with_addendum
from generation.response_extractor import parse_structured


class SpecSynthesizer(BaseSynthesizer):
    """
    Spec Synthesizer: Watches the content basis video and writes the activity
    spec that the code stage builds from.
    """

    async def synthesize(self, content_basis: str) -> str:
        """
        Generate an activity spec for a video

        Args:
            content_basis: Video locator attached to the request as a file part

        Returns:
            The extracted spec with the fixed addendum appended

        Raises:
            GenerationError: If the model call fails or is safety filtered
            ParseError: If the response is not a JSON object with a "spec" field
        """
        self.logger.info(f"Generating spec from video: {content_basis}")

        response = await self._call_llm(SPEC_FROM_VIDEO_PROMPT, video_url=content_basis)
        spec = parse_structured(response)

        self.logger.info(f"Extracted spec ({len(spec)} chars)")
        return with_addendum(spec)
