from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import StreamingResponse

from app.api.v1.schemas.portfolio import BundleRequest, GeneratePortfolioResponse
from app.core.config import Settings, get_settings
from app.core.context import get_request_id
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.domain.portfolio.bundle import BUNDLE_FILENAME, build_site_zip
from app.domain.portfolio.schemas import GeneratedSite
from app.domain.portfolio.workflow import run_portfolio_pipeline
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.factory import create_llm_client

router = APIRouter(prefix="/generate-portfolio", tags=["portfolio"])
logger = get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def _resolve_llm_client(settings: Settings) -> BaseLLMClient | None:
    """요청 처리 전 모델 설정 확인

    키가 없고 기본 사이트 생성이 허용된 경우에만 None을 반환한다.
    """
    if not settings.is_llm_configured and settings.portfolio_fallback_enabled:
        return None
    return create_llm_client(settings)


def _media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


async def _read_validated_pdf(resume: UploadFile | None, max_bytes: int) -> bytes:
    """업로드 파일 존재/형식/크기 검증 후 바이트 반환"""
    if resume is None:
        raise ValidationError(message="No file uploaded.", detail="missing resume field")

    if _media_type(resume.content_type) != PDF_CONTENT_TYPE:
        raise ValidationError(
            message="Invalid file type. Only PDF is allowed.",
            detail=f"content_type={resume.content_type}",
        )

    too_large = ValidationError(
        message=f"File is too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
        detail=f"max_bytes={max_bytes}",
    )
    if resume.size is not None and resume.size > max_bytes:
        raise too_large

    pdf_bytes = await resume.read()
    if len(pdf_bytes) > max_bytes:
        raise too_large

    return pdf_bytes


@router.post("", response_model=GeneratePortfolioResponse)
async def generate_portfolio(
    resume: UploadFile | None = File(default=None),
    custom_instructions: str | None = Form(default=None, alias="customInstructions"),
    settings: Settings = Depends(get_settings),
) -> GeneratePortfolioResponse:
    llm_client = _resolve_llm_client(settings)
    pdf_bytes = await _read_validated_pdf(resume, settings.max_upload_bytes)

    logger.info(
        "포트폴리오 생성 시작",
        filename=resume.filename,
        size=len(pdf_bytes),
        fallback=llm_client is None,
    )

    site = await run_portfolio_pipeline(
        pdf_bytes,
        custom_instructions,
        settings=settings,
        llm_client=llm_client,
        session_id=get_request_id(),
    )

    logger.info("포트폴리오 생성 완료", html_chars=len(site.html))
    return GeneratePortfolioResponse(**site.model_dump())


@router.post("/bundle")
async def bundle_portfolio(request: BundleRequest) -> StreamingResponse:
    site = GeneratedSite(html=request.html, css=request.css, js=request.js)
    headers = {"Content-Disposition": f'attachment; filename="{BUNDLE_FILENAME}"'}
    return StreamingResponse(build_site_zip(site), media_type="application/zip", headers=headers)
