import asyncio
import io

from pypdf import PdfReader

from app.core.exceptions import ExtractionError
from app.core.logging import get_logger
from app.domain.portfolio.prompts import (
    PORTFOLIO_CUSTOM_INSTRUCTIONS,
    PORTFOLIO_GENERATOR_INTRO,
    PORTFOLIO_GENERATOR_REQUIREMENTS,
)

logger = get_logger(__name__)


def _read_pdf_text(pdf_bytes: bytes) -> str:
    """PDF 바이트에서 페이지별 텍스트를 추출해 합친다"""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    pages_text = []
    for page in reader.pages:
        page_text = page.extract_text()
        if page_text:
            pages_text.append(page_text)
    return "\n\n".join(pages_text)


async def extract_resume_text(pdf_bytes: bytes) -> str:
    """PDF에서 이력서 텍스트 추출.

    pypdf 호출은 블로킹이므로 워커 스레드에서 실행한다.

    Args:
        pdf_bytes: 업로드된 PDF 원본 바이트

    Returns:
        추출된 텍스트

    Raises:
        ExtractionError: PDF를 읽을 수 없거나 추출된 텍스트가 비어 있는 경우
    """
    try:
        text = await asyncio.to_thread(_read_pdf_text, pdf_bytes)
    except Exception as e:
        logger.warning("PDF 텍스트 추출 실패", error=type(e).__name__, detail=str(e))
        raise ExtractionError(detail=f"{type(e).__name__}: {e}") from e

    if not text.strip():
        logger.warning("PDF 텍스트 없음", size=len(pdf_bytes))
        raise ExtractionError(
            message=(
                "Could not extract text from the PDF. "
                "The PDF might be empty or image-based."
            ),
            detail="extracted text is empty",
        )

    logger.info("PDF 텍스트 추출 완료", size=len(pdf_bytes), chars=len(text))
    return text


def build_portfolio_prompt(resume_text: str, custom_instructions: str | None = None) -> str:
    """이력서 텍스트와 사용자 지시사항으로 생성 프롬프트 구성"""
    sections = [PORTFOLIO_GENERATOR_INTRO.format(resume_text=resume_text)]

    if custom_instructions and custom_instructions.strip():
        sections.append(
            PORTFOLIO_CUSTOM_INSTRUCTIONS.format(custom_instructions=custom_instructions.strip())
        )

    sections.append(PORTFOLIO_GENERATOR_REQUIREMENTS.format())
    return "\n\n".join(sections)
