"""QuizSense - test submission scoring and AI-assisted evaluation."""

__version__ = "2.0.0"
