from abc import ABC, abstractmethod
from typing import TypeVar

from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import Runnable
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseLLMClient(ABC):
    """LLM 클라이언트 추상 클래스"""

    provider: str = ""

    @abstractmethod
    def get_chat_model(self) -> BaseChatModel:
        """LangChain 호환 채팅 모델 반환"""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """사용 중인 모델 이름 반환"""
        pass

    def with_structured_output(self, schema: type[T]) -> Runnable:
        """구조화된 출력을 위한 모델 반환

        파싱 실패 시에도 원문 응답을 돌려받도록 include_raw를 사용한다.
        """
        return self.get_chat_model().with_structured_output(schema, include_raw=True)
