"""Utility functions for the QuizSense backend."""

import json
from typing import Any, Tuple


def validate_file_type(filename: str, allowed_extensions: list) -> Tuple[bool, str]:
    """Validate file type by extension."""
    if not filename or "." not in filename:
        return False, f"File has no extension. Allowed: {allowed_extensions}"

    file_ext = filename.rsplit('.', 1)[-1].lower()
    
    if file_ext not in allowed_extensions:
        return False, f"File type '{file_ext}' not allowed. Allowed: {allowed_extensions}"
    
    return True, "OK"


def validate_file_size(file_bytes: bytes, max_size_mb: int) -> Tuple[bool, str]:
    """Validate file size in MB."""
    file_size_mb = len(file_bytes) / (1024 * 1024)
    
    if file_size_mb > max_size_mb:
        return False, f"File size {file_size_mb:.1f} MB exceeds limit of {max_size_mb} MB"
    
    return True, "OK"


def round_marks(value: float, max_marks: float) -> float:
    """Round to 2 decimals and clamp into [0, max_marks]."""
    return round(min(max(value, 0.0), max_marks), 2)


def extract_json(response_text: str) -> Any:
    """
    Parse JSON from an LLM response, tolerating markdown code fences.

    Raises:
        json.JSONDecodeError: If no valid JSON can be found
    """
    text = response_text.strip()

    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # Models sometimes wrap the payload in prose; retry on the outermost brackets
        for open_char, close_char in (("[", "]"), ("{", "}")):
            start, end = text.find(open_char), text.rfind(close_char)
            if start != -1 and end > start:
                try:
                    return json.loads(text[start:end + 1])
                except json.JSONDecodeError:
                    continue
        raise
