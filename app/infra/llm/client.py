import asyncio
import json
import os

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler

from app.core.config import Settings
from app.core.exceptions import ModelInvocationError
from app.core.logging import get_logger
from app.domain.portfolio.prompts import PORTFOLIO_GENERATOR_SYSTEM
from app.domain.portfolio.schemas import GeneratedSite
from app.infra.llm.base import BaseLLMClient

logger = get_logger(__name__)


def configure_langfuse(settings: Settings) -> None:
    """Langfuse SDK가 읽는 환경 변수 설정"""
    if settings.langfuse_public_key:
        os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
    if settings.langfuse_secret_key:
        os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
    if settings.langfuse_base_url:
        os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler(settings: Settings) -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def message_text(message: BaseMessage | None) -> str:
    """AIMessage content에서 텍스트만 이어 붙인다"""
    if message is None:
        return ""

    content = message.content
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


async def generate_site_code(
    llm_client: BaseLLMClient,
    prompt: str,
    settings: Settings,
    session_id: str | None = None,
) -> tuple[GeneratedSite | None, str]:
    """프롬프트로 포트폴리오 코드 생성 (단일 호출, 재시도 없음)

    구조화 출력이 켜져 있으면 스키마 기반 결과와 원문을 함께 받는다.

    Args:
        llm_client: 생성용 LLM 클라이언트
        prompt: 완성된 생성 프롬프트
        settings: 타임아웃/구조화 출력 설정
        session_id: Langfuse 세션 ID

    Returns:
        (구조화 파싱 결과 또는 None, 원문 텍스트) 튜플

    Raises:
        ModelInvocationError: 호출 실패, 타임아웃, 빈 응답
    """
    logger.debug(
        "포트폴리오 생성 요청",
        provider=llm_client.provider,
        model=llm_client.get_model_name(),
        prompt_chars=len(prompt),
        structured=settings.llm_structured_output,
    )

    langfuse_handler = get_langfuse_handler(settings)
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["portfolio", "generate"],
        },
    }
    messages = [
        SystemMessage(content=PORTFOLIO_GENERATOR_SYSTEM),
        HumanMessage(content=prompt),
    ]

    if settings.llm_structured_output:
        runnable = llm_client.with_structured_output(GeneratedSite)
    else:
        runnable = llm_client.get_chat_model()

    try:
        result = await asyncio.wait_for(
            runnable.ainvoke(messages, config=config),
            timeout=settings.llm_timeout,
        )
    except asyncio.TimeoutError as e:
        logger.error("포트폴리오 생성 타임아웃", timeout=settings.llm_timeout)
        raise ModelInvocationError(
            message="The AI model timed out while generating the portfolio.",
            detail=f"timeout after {settings.llm_timeout}s",
        ) from e
    except Exception as e:
        logger.error("포트폴리오 생성 호출 실패", error=type(e).__name__, exc_info=True)
        raise ModelInvocationError(detail=f"{type(e).__name__}: {e}") from e

    if isinstance(result, dict):
        parsed = result.get("parsed")
        raw = result.get("raw")
        raw_text = message_text(raw)
        if not raw_text.strip() and getattr(raw, "tool_calls", None):
            # function_calling 방식은 content 없이 tool_calls args로 응답
            raw_text = json.dumps(raw.tool_calls[0].get("args", {}), ensure_ascii=False)
        if result.get("parsing_error") is not None:
            logger.warning("구조화 출력 파싱 실패, 원문 파싱으로 대체", error=str(result["parsing_error"]))
    else:
        parsed = None
        raw_text = message_text(result)

    if not isinstance(parsed, GeneratedSite):
        parsed = None

    if parsed is None and not raw_text.strip():
        logger.error("포트폴리오 생성 결과 없음")
        raise ModelInvocationError(
            message="The AI model did not return any content.",
            detail="empty model output",
        )

    logger.debug("포트폴리오 생성 완료", structured=parsed is not None, raw_chars=len(raw_text))
    return parsed, raw_text
