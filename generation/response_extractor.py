import json
import re

from utils.errors import ParseError


def _sanitize_json_output(text: str) -> str:
    """Remove ```json ``` code fences from LLM output"""
    sanitized = re.sub(r'^\s*```(?:json)?\s*', '', text, flags=re.IGNORECASE)
    sanitized = re.sub(r'```\s*$', '', sanitized)
    return sanitized.strip()


def parse_structured(raw: str) -> str:
    """
    Extract the spec text from a stage-one JSON response

    Args:
        raw: Raw model output, expected to be a JSON object with a "spec" field

    Returns:
        The value of the "spec" field

    Raises:
        ParseError: If the output is not JSON, not an object, or has no string "spec"
    """
    try:
        data = json.loads(_sanitize_json_output(raw or ""))
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON response from model: {(raw or '')[:200]}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    spec = data.get("spec")
    if not isinstance(spec, str):
        raise ParseError('JSON response has no string "spec" field')

    return spec


def parse_delimited(raw: str, opener: str, closer: str) -> str:
    """Return the text strictly between the first opener and the closer that follows it"""
    raw = raw or ""

    start = raw.find(opener)
    if start == -1:
        raise ParseError(f"Opening marker {opener!r} not found in model response")
    start += len(opener)

    end = raw.find(closer, start)
    if end == -1:
        raise ParseError(f"Closing marker {closer!r} not found in model response")

    return raw[start:end]
