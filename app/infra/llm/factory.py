from typing import Literal

from app.core.config import Settings
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.gemini_client import GeminiClient
from app.infra.llm.openai_client import OpenAIClient

logger = get_logger(__name__)

LLMProvider = Literal["gemini", "openai"]

CLIENTS: dict[str, type[BaseLLMClient]] = {
    "gemini": GeminiClient,
    "openai": OpenAIClient,
}


def create_llm_client(settings: Settings) -> BaseLLMClient:
    """설정에 맞는 포트폴리오 생성용 LLM 클라이언트 생성

    요청마다 호출되며 API 키가 없으면 ConfigurationError를 던진다.
    """
    client_class = CLIENTS.get(settings.llm_provider)
    if client_class is None:
        raise ConfigurationError(
            message="Generative model provider is not supported.",
            detail=f"LLM_PROVIDER={settings.llm_provider}",
        )

    client = client_class(settings)
    logger.debug("LLM 클라이언트 생성", provider=settings.llm_provider, model=client.get_model_name())
    return client
