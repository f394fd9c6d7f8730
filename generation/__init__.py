"""
Generation module: model access and response handling

This module contains components for:
- Calling Gemini with an optional video attachment
- Extracting the spec (JSON) and code (sentinel markers) from raw model text
"""

from .text_generation import TextGenerationService, GenerationRequest
from .response_extractor import parse_structured, parse_delimited

__all__ = ['TextGenerationService', 'GenerationRequest', 'parse_structured', 'parse_delimited']
