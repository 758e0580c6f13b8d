from typing import Literal

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from app.core.config import Settings
from app.core.exceptions import CustomException, exception_for
from app.core.logging import get_logger
from app.domain.portfolio.fallback import render_fallback_site
from app.domain.portfolio.parsers import parse_generated_site, validate_generated_site
from app.domain.portfolio.schemas import GeneratedSite, PortfolioState
from app.domain.portfolio.service import build_portfolio_prompt, extract_resume_text
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import generate_site_code

logger = get_logger(__name__)


def _failed(state: PortfolioState, exc: CustomException) -> PortfolioState:
    """예외를 워크플로우 에러 상태로 변환"""
    return {
        **state,
        "error_code": exc.code,
        "error_message": exc.message,
        "error_detail": exc.detail or "",
    }


def _configurable(config: RunnableConfig | None) -> dict:
    return (config or {}).get("configurable", {})


async def extract_text_node(state: PortfolioState) -> PortfolioState:
    """텍스트 추출 노드: PDF에서 이력서 텍스트 추출"""
    logger.info("extract_text_node 시작", size=len(state["pdf_bytes"]))

    try:
        resume_text = await extract_resume_text(state["pdf_bytes"])
    except CustomException as e:
        return _failed(state, e)

    return {**state, "resume_text": resume_text}


async def build_prompt_node(state: PortfolioState) -> PortfolioState:
    """프롬프트 구성 노드"""
    prompt = build_portfolio_prompt(state["resume_text"], state.get("custom_instructions"))
    logger.info(
        "build_prompt_node 완료",
        prompt_chars=len(prompt),
        has_instructions=bool(state.get("custom_instructions")),
    )
    return {**state, "prompt": prompt}


async def invoke_model_node(state: PortfolioState, config: RunnableConfig) -> PortfolioState:
    """모델 호출 노드: 외부 생성 모델에 프롬프트 전달"""
    configurable = _configurable(config)
    llm_client: BaseLLMClient = configurable["llm_client"]
    settings: Settings = configurable["settings"]

    logger.info("invoke_model_node 시작", model=llm_client.get_model_name())

    try:
        parsed_site, raw_output = await generate_site_code(
            llm_client,
            state["prompt"],
            settings,
            session_id=configurable.get("session_id"),
        )
    except CustomException as e:
        return _failed(state, e)

    return {**state, "parsed_site": parsed_site, "raw_output": raw_output}


async def parse_response_node(state: PortfolioState) -> PortfolioState:
    """응답 검증 노드: 구조화 결과가 없으면 원문에서 JSON 추출"""
    try:
        if state.get("parsed_site") is not None:
            site = validate_generated_site(state["parsed_site"])
        else:
            site = parse_generated_site(state.get("raw_output", ""))
    except CustomException as e:
        logger.error(
            "parse_response_node 실패",
            error_code=e.code,
            raw_preview=state.get("raw_output", "")[:500],
        )
        return _failed(state, e)

    logger.info("parse_response_node 완료", html_chars=len(site.html))
    return {**state, "site": site}


async def render_fallback_node(state: PortfolioState) -> PortfolioState:
    """정규식 기반 기본 사이트 생성 노드"""
    logger.warning("LLM 미설정, 정규식 기본 사이트로 대체")
    return {**state, "site": render_fallback_site(state["resume_text"])}


def after_extract(
    state: PortfolioState, config: RunnableConfig
) -> Literal["build_prompt", "fallback", "end"]:
    """추출 이후 분기: 에러면 종료, LLM이 없으면 기본 사이트 생성"""
    if state.get("error_code"):
        logger.info("after_extract: 에러 발생, 종료")
        return "end"
    if _configurable(config).get("llm_client") is None:
        return "fallback"
    return "build_prompt"


def should_continue(state: PortfolioState) -> Literal["continue", "end"]:
    """에러 상태 확인: 에러 있으면 종료, 없으면 다음 노드로"""
    if state.get("error_code"):
        logger.info("should_continue: 에러 발생, 종료")
        return "end"
    return "continue"


def create_portfolio_workflow() -> CompiledStateGraph:
    """포트폴리오 생성 워크플로우 생성

    extract_text → build_prompt → invoke_model → parse_response
    """
    workflow = StateGraph(PortfolioState)

    workflow.add_node("extract_text", extract_text_node)
    workflow.add_node("build_prompt", build_prompt_node)
    workflow.add_node("invoke_model", invoke_model_node)
    workflow.add_node("parse_response", parse_response_node)
    workflow.add_node("render_fallback", render_fallback_node)

    workflow.set_entry_point("extract_text")

    workflow.add_conditional_edges(
        "extract_text",
        after_extract,
        {
            "build_prompt": "build_prompt",
            "fallback": "render_fallback",
            "end": END,
        },
    )
    workflow.add_conditional_edges(
        "build_prompt",
        should_continue,
        {"continue": "invoke_model", "end": END},
    )
    workflow.add_conditional_edges(
        "invoke_model",
        should_continue,
        {"continue": "parse_response", "end": END},
    )
    workflow.add_edge("parse_response", END)
    workflow.add_edge("render_fallback", END)

    return workflow.compile()


async def run_portfolio_pipeline(
    pdf_bytes: bytes,
    custom_instructions: str | None,
    *,
    settings: Settings,
    llm_client: BaseLLMClient | None,
    session_id: str | None = None,
) -> GeneratedSite:
    """이력서 PDF로 포트폴리오 사이트 생성.

    Args:
        pdf_bytes: 검증된 PDF 바이트
        custom_instructions: 사용자 추가 지시사항
        settings: 애플리케이션 설정
        llm_client: 생성용 LLM 클라이언트, None이면 정규식 기본 사이트 생성
        session_id: Langfuse 세션 ID

    Returns:
        검증된 GeneratedSite

    Raises:
        CustomException: 단계별 실패에 대응하는 예외
    """
    workflow = create_portfolio_workflow()
    final_state: PortfolioState = await workflow.ainvoke(
        PortfolioState(pdf_bytes=pdf_bytes, custom_instructions=custom_instructions),
        config={
            "configurable": {
                "llm_client": llm_client,
                "settings": settings,
                "session_id": session_id,
            }
        },
    )

    error_code = final_state.get("error_code")
    if error_code:
        raise exception_for(
            error_code,
            message=final_state.get("error_message"),
            detail=final_state.get("error_detail") or None,
        )

    return final_state["site"]
