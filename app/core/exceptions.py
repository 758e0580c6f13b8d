from enum import Enum

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    INVALID_INPUT = "INVALID_INPUT"
    PDF_EXTRACTION_FAILED = "PDF_EXTRACTION_FAILED"
    LLM_NOT_CONFIGURED = "LLM_NOT_CONFIGURED"
    LLM_API_ERROR = "LLM_API_ERROR"
    GENERATE_PARSE_ERROR = "GENERATE_PARSE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)

    @property
    def code(self) -> str:
        """직렬화용 에러 코드 문자열"""
        return getattr(self.error_code, "value", self.error_code)


class ValidationError(CustomException):
    def __init__(self, message: str = "Invalid request.", detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message=message,
            detail=detail,
        )


class ExtractionError(CustomException):
    def __init__(
        self,
        message: str = "Failed to extract text from PDF.",
        detail: str | None = None,
    ):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.PDF_EXTRACTION_FAILED,
            message=message,
            detail=detail,
        )


class ConfigurationError(CustomException):
    def __init__(
        self,
        message: str = "Generative model API key is not configured.",
        detail: str | None = None,
    ):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.LLM_NOT_CONFIGURED,
            message=message,
            detail=detail,
        )


class ModelInvocationError(CustomException):
    def __init__(
        self,
        message: str = "The AI model failed to generate the portfolio.",
        detail: str | None = None,
    ):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.LLM_API_ERROR,
            message=message,
            detail=detail,
        )


class ResponseParseError(CustomException):
    def __init__(
        self,
        message: str = "Failed to parse the generated code from AI.",
        detail: str | None = None,
    ):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.GENERATE_PARSE_ERROR,
            message=message,
            detail=detail,
        )


ERROR_TYPES: dict[str, type[CustomException]] = {
    ErrorCode.INVALID_INPUT.value: ValidationError,
    ErrorCode.PDF_EXTRACTION_FAILED.value: ExtractionError,
    ErrorCode.LLM_NOT_CONFIGURED.value: ConfigurationError,
    ErrorCode.LLM_API_ERROR.value: ModelInvocationError,
    ErrorCode.GENERATE_PARSE_ERROR.value: ResponseParseError,
}


def exception_for(
    error_code: ErrorCode | str, message: str | None = None, detail: str | None = None
) -> CustomException:
    """에러 코드에 대응하는 예외 인스턴스 생성"""
    exc_type = ERROR_TYPES.get(getattr(error_code, "value", error_code))
    if exc_type is None:
        return CustomException(
            status_code=500,
            error_code=ErrorCode.INTERNAL_ERROR,
            message=message or "An unexpected error occurred processing your resume.",
            detail=detail,
        )
    if message:
        return exc_type(message=message, detail=detail)
    return exc_type(detail=detail)


def _error_body(exc: CustomException) -> dict:
    return {"error": exc.message, "error_code": exc.code}


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "요청 처리 실패",
            path=request.url.path,
            error_code=exc.code,
            status_code=exc.status_code,
            detail=exc.detail,
        )
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "처리되지 않은 예외",
            path=request.url.path,
            error=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(exception_for(ErrorCode.INTERNAL_ERROR)),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning("요청 검증 실패", path=request.url.path, errors=len(errors))
        message = "Invalid request."
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        return JSONResponse(
            status_code=400,
            content=_error_body(ValidationError(message=message)),
        )
