"""포트폴리오 API 스키마."""

from pydantic import BaseModel, Field


class GeneratePortfolioResponse(BaseModel):
    """포트폴리오 생성 응답."""

    html: str
    css: str
    js: str


class BundleRequest(BaseModel):
    """ZIP 번들 요청."""

    html: str = Field(min_length=1)
    css: str
    js: str
