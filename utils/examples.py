import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from agents.models import Example
from utils.validators import PipelineValidator, ValidationError

logger = logging.getLogger("ExampleLibrary")


class ExampleLibrary:
    """Pre-seeded examples looked up by video URL"""

    def __init__(self, examples: Optional[List[Example]] = None):
        self._by_url: Dict[str, Example] = {}
        for example in examples or []:
            self._by_url[example.url.strip()] = example

    @classmethod
    def load(cls, examples_path: Optional[Path]) -> "ExampleLibrary":
        """Load examples from a JSON array; a missing path yields an empty library"""
        if examples_path is None:
            return cls()

        try:
            examples_path = PipelineValidator.validate_examples_file(examples_path)
        except ValidationError as e:
            logger.warning(f"No examples loaded: {e}")
            return cls()

        with open(examples_path, encoding="utf-8") as f:
            raw_examples = json.load(f)

        examples = []
        for raw in raw_examples:
            try:
                examples.append(Example(**raw))
            except PydanticValidationError as e:
                logger.warning(f"Invalid example data: {e}")
                continue

        logger.info(f"Loaded {len(examples)} examples from {examples_path}")
        return cls(examples)

    def find(self, url: str) -> Optional[Example]:
        return self._by_url.get(url.strip())

    def __iter__(self) -> Iterator[Example]:
        return iter(self._by_url.values())

    def __len__(self) -> int:
        return len(self._by_url)
