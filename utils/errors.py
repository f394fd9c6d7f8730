"""
Error taxonomy for the generation pipeline
"""

from typing import Optional


class GenerationError(Exception):
    """Raised when the text generation service fails to produce a usable completion"""
    pass


class NoCandidateError(GenerationError):
    """The model returned no output candidate"""
    pass


class AbnormalFinishError(GenerationError):
    """The candidate stopped for a reason other than a normal stop"""

    def __init__(self, finish_reason: str):
        self.finish_reason = finish_reason
        super().__init__(f"Content generation failed: Stopped due to {finish_reason}.")


class SafetyBlockedError(GenerationError):
    """Base for completions filtered by the model's safety settings"""
    pass


class BlockedPromptError(SafetyBlockedError):
    """The prompt itself was blocked"""

    def __init__(self, block_reason: str):
        self.block_reason = block_reason
        super().__init__(f"Content generation failed: Prompt blocked (reason: {block_reason})")


class SafetyFinishError(SafetyBlockedError):
    """The candidate finished with a safety-related reason"""

    def __init__(self, finish_reason: str = "SAFETY"):
        self.finish_reason = finish_reason
        super().__init__("Content generation failed: Response blocked due to safety settings.")


class ParseError(ValueError):
    """Raised when raw model output cannot be turned into a spec or code block"""
    pass


class SessionBusyError(RuntimeError):
    """A generation task is already in flight for this session"""
    pass


class InvalidTransitionError(RuntimeError):
    """The requested operation is not allowed in the session's current state"""
    pass


class SessionAbandonedError(RuntimeError):
    """The session was abandoned and no longer accepts operations"""
    pass


def friendly_error_message(error: Optional[BaseException]) -> str:
    """Map a pipeline failure to a message suitable for the host surface"""
    if error is None:
        return "Our robots hit a little snag. Please try again!"

    detail = str(error)
    if isinstance(error, SafetyBlockedError) or "SAFETY" in detail or "blocked" in detail:
        return (
            "The content couldn't be created for this video. This can sometimes "
            "happen due to safety filters. Please try a different video."
        )
    if "API key" in detail:
        return "There seems to be an issue with the connection. Please check your setup and try again."

    return "Our robots got a little stuck building the game. Would you like to try again?"
