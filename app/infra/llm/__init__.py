from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import generate_site_code
from app.infra.llm.factory import create_llm_client
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "OpenAIClient",
    "create_llm_client",
    "generate_site_code",
]
