import json

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ResponseParseError
from app.core.logging import get_logger
from app.domain.portfolio.schemas import GeneratedSite

logger = get_logger(__name__)

RAW_PREVIEW_LENGTH = 500


def extract_json_block(raw: str) -> str:
    """모델 출력에서 첫 '{'부터 마지막 '}'까지를 잘라낸다.

    괄호를 찾지 못하면 원문을 그대로 반환한다.
    """
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end < start:
        return raw
    return raw[start : end + 1]


def validate_generated_site(data: object) -> GeneratedSite:
    """html/css/js 세 키가 모두 문자열이고 html이 비어 있지 않은지 검증"""
    if isinstance(data, GeneratedSite):
        data = data.model_dump()

    if not isinstance(data, dict):
        raise ResponseParseError(
            message="AI response is not a JSON object.",
            detail=f"type={type(data).__name__}",
        )

    try:
        site = GeneratedSite.model_validate(data, strict=True)
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        logger.warning("생성 결과 스키마 불일치", fields=fields)
        raise ResponseParseError(
            message="AI response is missing expected html, css, or js keys.",
            detail=f"invalid fields: {', '.join(fields)}",
        ) from e

    if not site.html:
        logger.warning("생성 결과 html 비어 있음")
        raise ResponseParseError(
            message="AI response contains an empty html document.",
            detail="html is empty",
        )

    return site


def parse_generated_site(raw: str) -> GeneratedSite:
    """모델의 원문 출력에서 GeneratedSite 파싱.

    Args:
        raw: 모델이 반환한 텍스트 (JSON 앞뒤에 설명이 붙어 있을 수 있음)

    Returns:
        검증된 GeneratedSite

    Raises:
        ResponseParseError: JSON 파싱 실패 또는 필수 키 누락/타입 불일치
    """
    candidate = extract_json_block(raw)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(
            "생성 결과 JSON 파싱 실패",
            error=str(e),
            raw_preview=raw[:RAW_PREVIEW_LENGTH],
        )
        raise ResponseParseError(detail=f"JSONDecodeError: {e}") from e

    return validate_generated_site(data)
