"""
Google Gemini client used by the grading, OCR and extraction adapters.
"""

import asyncio
import logging
from typing import Any, List, Optional, Union

import google.generativeai as genai

from ..config.settings import settings

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin async wrapper over a Gemini GenerativeModel."""
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: Optional[float] = None
    ):
        self.model_name = model_name or settings.GEMINI_MODEL
        self.timeout = timeout if timeout is not None else settings.LLM_TIMEOUT
        self.temperature = temperature if temperature is not None else settings.LLM_TEMPERATURE
        
        genai.configure(api_key=api_key or settings.GEMINI_API_KEY)
        self.model = genai.GenerativeModel(self.model_name)
    
    async def generate(
        self,
        content: Union[str, List[Any]],
        max_output_tokens: int = 1000
    ) -> str:
        """
        Send content to Gemini and return the response text.
        
        The blocking SDK call runs in a worker thread.
        
        Raises:
            asyncio.TimeoutError: If Gemini does not answer within the timeout
        """
        response = await asyncio.wait_for(
            asyncio.to_thread(
                lambda: self.model.generate_content(
                    content,
                    generation_config=genai.types.GenerationConfig(
                        temperature=self.temperature,
                        max_output_tokens=max_output_tokens
                    )
                )
            ),
            timeout=self.timeout
        )
        return response.text.strip()
