from pydantic_settings import BaseSettings
from pathlib import Path
from typing import Optional


class Settings(BaseSettings):
    # API Keys
    google_api_key: Optional[str] = None

    # Model Selection
    spec_model: str = "gemini-2.5-flash"  # Watches the video and writes the activity spec
    code_model: str = "gemini-2.5-flash"  # Turns the spec into a single-file HTML app

    # Generation Settings
    generation_temperature: float = 0.75
    video_mime_type: str = "video/mp4"

    # Paths
    output_dir: Path = Path("output")
    examples_path: Optional[Path] = None  # JSON list of pre-seeded examples

    @property
    def log_file(self) -> Path:
        return self.output_dir / "pipeline.log"

    # Logging
    log_level: str = "INFO"

    # Gradio Settings
    server_name: str = "127.0.0.1"
    server_port: int = 7860

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def create_directories(self):
        """Create the output directory if it doesn't exist"""
        self.output_dir.mkdir(parents=True, exist_ok=True)


# Initialize settings and create directories
settings = Settings()
settings.create_directories()
