from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from app.core.config import Settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """OpenAI API 클라이언트 - 대체 생성용"""

    provider = "openai"

    def __init__(self, settings: Settings):
        if not settings.openai_api_key:
            raise ConfigurationError(
                message=(
                    "OpenAI API key not configured. "
                    "Please set OPENAI_API_KEY environment variable."
                ),
                detail="OPENAI_API_KEY is empty",
            )

        self._model_name = settings.openai_model
        self._model = ChatOpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout,
            max_retries=0,
        )

    def get_chat_model(self) -> BaseChatModel:
        """LangChain ChatOpenAI 모델 반환"""
        return self._model

    def get_model_name(self) -> str:
        """사용 중인 모델 이름 반환"""
        return self._model_name
