from typing import TypedDict

from pydantic import BaseModel, Field


class GeneratedSite(BaseModel):
    """생성된 포트폴리오 사이트 코드"""

    html: str = Field(
        description="Full HTML document including <!DOCTYPE html>, <head> and <body>"
    )
    css: str = Field(description="Complete CSS for style.css, may be empty")
    js: str = Field(description="Complete JavaScript for script.js, may be empty")


class ContactInfo(BaseModel):
    """이력서에서 추출한 연락처"""

    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


class StructuredResume(BaseModel):
    """정규식 기반 이력서 추출 결과"""

    name: str
    title: str
    contact: ContactInfo
    summary: str
    skills: list[str] = Field(default_factory=list)


class PortfolioState(TypedDict, total=False):
    """LangGraph 포트폴리오 생성 워크플로우 상태"""

    pdf_bytes: bytes
    custom_instructions: str | None
    resume_text: str
    prompt: str
    raw_output: str
    parsed_site: GeneratedSite | None
    site: GeneratedSite
    error_code: str
    error_message: str
    error_detail: str
