"""테스트 공통 fixture"""

from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings, get_settings
from app.domain.portfolio.schemas import GeneratedSite
from app.infra.llm.base import BaseLLMClient
from app.main import app

SAMPLE_RESUME_LINES = [
    "Jane Doe",
    "Senior Software Engineer",
    "jane.doe@example.com | (555) 123-4567",
    "linkedin.com/in/janedoe | github.com/janedoe",
    "Summary",
    "Backend engineer with a focus on APIs and data pipelines.",
    "Experience",
    "Acme Corp - Software Engineer - 2019-2024",
    "Skills",
    "Python, FastAPI, PostgreSQL",
    "Education",
    "BSc Computer Science, State University",
]


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines: list[str]) -> bytes:
    """텍스트 줄을 담은 1페이지 PDF 생성"""
    if lines:
        body = " ".join(f"({_escape_pdf_text(line)}) Tj T*" for line in lines)
        content = f"BT /F1 12 Tf 14 TL 72 720 Td {body} ET".encode("latin-1")
    else:
        content = b""

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>"
        ),
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    pdf = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, obj in enumerate(objects, start=1):
        offsets.append(len(pdf))
        pdf += b"%d 0 obj\n" % number + obj + b"\nendobj\n"

    xref_offset = len(pdf)
    pdf += b"xref\n0 %d\n" % (len(objects) + 1)
    pdf += b"0000000000 65535 f \n"
    for offset in offsets:
        pdf += b"%010d 00000 n \n" % offset
    pdf += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    pdf += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(pdf)


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """텍스트가 있는 테스트용 이력서 PDF"""
    return build_pdf(SAMPLE_RESUME_LINES)


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """텍스트가 없는 (이미지 전용과 같은) PDF"""
    return build_pdf([])


@pytest.fixture
def sample_site() -> GeneratedSite:
    """테스트용 생성 사이트"""
    return GeneratedSite(
        html="<!DOCTYPE html><html><head><title>Jane</title></head><body><h1>Jane</h1></body></html>",
        css="body { font-family: Lato, sans-serif; }",
        js="",
    )


@pytest.fixture
def test_settings() -> Settings:
    """API 키가 설정된 테스트 설정"""
    return Settings(
        _env_file=None,
        environment="test",
        llm_provider="gemini",
        gemini_api_key="test-gemini-key",
        openai_api_key="",
        llm_timeout=5.0,
        langfuse_public_key="",
        langfuse_secret_key="",
        portfolio_fallback_enabled=False,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """API 키가 없는 테스트 설정"""
    return Settings(
        _env_file=None,
        environment="test",
        llm_provider="gemini",
        gemini_api_key="",
        openai_api_key="",
        langfuse_public_key="",
        langfuse_secret_key="",
        portfolio_fallback_enabled=False,
    )


@pytest.fixture
def fallback_settings(unconfigured_settings) -> Settings:
    """API 키 없이 정규식 기본 사이트 생성을 허용한 설정"""
    return unconfigured_settings.model_copy(update={"portfolio_fallback_enabled": True})


@pytest.fixture
def mock_llm_client() -> MagicMock:
    """포트폴리오 생성용 LLM 클라이언트 mock"""
    client = MagicMock(spec=BaseLLMClient)
    client.provider = "gemini"
    client.get_model_name.return_value = "gemini-test"
    return client


@pytest.fixture
def override_settings():
    """엔드포인트에 주입되는 설정 교체 helper"""

    def _override(settings: Settings) -> None:
        app.dependency_overrides[get_settings] = lambda: settings

    yield _override
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def async_client():
    """비동기 HTTP 클라이언트"""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def configured_app(override_settings, test_settings, mock_llm_client):
    """API 키가 설정된 상태로 앱 구성, LLM 클라이언트 생성은 mock"""
    override_settings(test_settings)
    with patch("app.api.v1.portfolio.create_llm_client", return_value=mock_llm_client):
        yield test_settings
