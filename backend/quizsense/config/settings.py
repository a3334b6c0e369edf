"""
Configuration settings for QuizSense.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(ROOT_DIR / ".env")


class Settings:
    """Application settings loaded from environment."""
    
    # Database
    MONGODB_URL: str = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
    DATABASE_NAME: str = os.environ.get("DATABASE_NAME", "quizsense")
    
    # API Keys
    GEMINI_API_KEY: Optional[str] = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_AI_KEY")
    GEMINI_MODEL: str = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")
    
    # Server
    PORT: int = int(os.environ.get("PORT", 8001))
    HOST: str = os.environ.get("HOST", "0.0.0.0")
    DEBUG: bool = os.environ.get("DEBUG", "False").lower() == "true"
    
    # AI Configuration
    LLM_TIMEOUT: int = int(os.environ.get("LLM_TIMEOUT", 60))  # seconds
    LLM_TEMPERATURE: float = 0.0  # Deterministic grading
    LLM_MAX_RETRIES: int = int(os.environ.get("LLM_MAX_RETRIES", 2))
    
    # Grading
    GRADING_CONCURRENCY: int = int(os.environ.get("GRADING_CONCURRENCY", 5))  # Concurrent subjective gradings
    
    # PDF processing
    PDF_CHUNK_SIZE: int = 15000  # Characters per AI call
    MIN_PDF_TEXT_LENGTH: int = 50  # Below this the PDF is probably scanned
    JPEG_QUALITY: int = 85
    
    # File upload
    MAX_FILE_SIZE_MB: int = 10
    ALLOWED_PDF_EXTENSIONS: list = ["pdf"]
    ALLOWED_IMAGE_EXTENSIONS: list = ["png", "jpg", "jpeg"]
    
    # Logging
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    
    def validate(self):
        """Validate critical settings."""
        if not self.MONGODB_URL:
            raise ValueError("MONGODB_URI environment variable not set")
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable not set")
        if self.GRADING_CONCURRENCY < 1:
            raise ValueError("GRADING_CONCURRENCY must be at least 1")
        return True


# Global settings instance
settings = Settings()
