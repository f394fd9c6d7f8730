from abc import ABC, abstractmethod
import logging
from typing import Optional, List

from google.genai import types

from generation.text_generation import GenerationRequest, TextGenerationService


class BaseSynthesizer(ABC):
    """Base class for the generation stages backed by the text generation service"""

    def __init__(
        self,
        service: TextGenerationService,
        model: str,
        temperature: float = 0.75,
        safety_settings: Optional[List[types.SafetySetting]] = None,
    ):
        self.service = service
        self.model = model
        self.temperature = temperature
        self.safety_settings = safety_settings
        self.logger = logging.getLogger(self.__class__.__name__)
        self.call_count = 0

    async def _call_llm(self, prompt: str, video_url: Optional[str] = None) -> str:
        """Call the model once; failures propagate to the caller untouched"""

        request = GenerationRequest(
            model_identifier=self.model,
            prompt=prompt,
            video_reference=video_url,
            temperature=self.temperature,
            safety_overrides=self.safety_settings,
        )

        self.call_count += 1
        response = await self.service.generate(request)
        self.logger.info(f"LLM call successful ({len(response)} chars)")

        return response

    def get_generation_stats(self) -> dict:
        """Return call statistics for this stage"""
        return {
            "model_used": self.model,
            "temperature": self.temperature,
            "calls": self.call_count,
        }

    @abstractmethod
    async def synthesize(self, *args, **kwargs) -> str:
        """Run the stage - to be implemented by subclasses"""
        pass
