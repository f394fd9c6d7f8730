"""
Utility modules for the video-to-game generator
"""

from .validators import (
    PipelineValidator,
    ValidationError
)
from .errors import friendly_error_message

__all__ = [
    'PipelineValidator',
    'ValidationError',
    'friendly_error_message'
]
