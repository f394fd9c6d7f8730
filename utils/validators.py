"""
Validation utilities for pipeline inputs
"""

import re
from pathlib import Path
from typing import Optional


class ValidationError(Exception):
    """Custom exception for validation errors"""
    pass


class PipelineValidator:
    """Utility class for validating pipeline inputs"""

    @staticmethod
    def validate_content_basis(content_basis: Optional[str]) -> str:
        """Validate the video locator a session is opened for"""
        if not content_basis or not content_basis.strip():
            raise ValidationError("Video link cannot be empty")

        content_basis = content_basis.strip()

        if len(content_basis) > 2048:
            raise ValidationError("Video link too long (max 2048 characters)")

        if re.search(r'\s', content_basis):
            raise ValidationError("Video link cannot contain whitespace")

        return content_basis

    @staticmethod
    def validate_api_key(api_key: Optional[str], service_name: str) -> str:
        """Validate API key format"""
        if not api_key or not api_key.strip():
            raise ValidationError(f"{service_name} API key is required")

        api_key = api_key.strip()

        if len(api_key) < 10:
            raise ValidationError(f"{service_name} API key appears to be invalid")

        return api_key

    @staticmethod
    def validate_examples_file(examples_path: Path) -> Path:
        """Validate an examples file exists and is a JSON file"""
        examples_path = Path(examples_path)

        if not examples_path.is_file():
            raise ValidationError(f"Examples file not found: {examples_path}")

        if examples_path.suffix.lower() != ".json":
            raise ValidationError(f"Examples file must be JSON: {examples_path}")

        return examples_path
