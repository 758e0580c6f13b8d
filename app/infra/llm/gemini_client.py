from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from app.core.config import Settings
from app.core.exceptions import ConfigurationError
from app.infra.llm.base import BaseLLMClient


class GeminiClient(BaseLLMClient):
    """Gemini 클라이언트 - 기본 포트폴리오 생성용"""

    provider = "gemini"

    def __init__(self, settings: Settings):
        if not settings.gemini_api_key:
            raise ConfigurationError(
                message=(
                    "Google API key not configured. "
                    "Please set GEMINI_API_KEY environment variable."
                ),
                detail="GEMINI_API_KEY is empty",
            )

        self._model_name = settings.gemini_model
        self._model = ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=settings.gemini_api_key,
            temperature=settings.llm_temperature,
            timeout=settings.llm_timeout,
            max_retries=0,
        )

    def get_chat_model(self) -> BaseChatModel:
        """LangChain ChatGoogleGenerativeAI 모델 반환"""
        return self._model

    def get_model_name(self) -> str:
        """사용 중인 모델 이름 반환"""
        return self._model_name
