# Agents package

from .base import BaseSynthesizer
from .spec_synthesizer import SpecSynthesizer
from .code_synthesizer import CodeSynthesizer
from .models import LoadingState, SessionError, SessionSnapshot, Example

__all__ = [
    'BaseSynthesizer',
    'SpecSynthesizer',
    'CodeSynthesizer',
    'LoadingState',
    'SessionError',
    'SessionSnapshot',
    'Example'
]
