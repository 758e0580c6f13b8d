from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택: "gemini" 또는 "openai"
    llm_provider: str = "gemini"

    # Gemini 설정 - 기본 생성 모델
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # OpenAI 설정 - 대체 생성 모델
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    # 모델 호출 설정
    llm_timeout: float = 120.0
    llm_temperature: float = 0.7
    llm_structured_output: bool = True

    # 업로드 제한
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    # API 키가 없을 때 정규식 기반 기본 사이트 생성 허용 여부
    portfolio_fallback_enabled: bool = False

    # 로깅 설정
    log_level: str = "INFO"

    # CORS 설정
    cors_allowed_origins: str = ""

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def llm_api_key(self) -> str:
        """선택된 프로바이더의 API 키 반환"""
        if self.llm_provider == "openai":
            return self.openai_api_key
        return self.gemini_api_key

    @property
    def llm_model(self) -> str:
        """선택된 프로바이더의 모델 이름 반환"""
        if self.llm_provider == "openai":
            return self.openai_model
        return self.gemini_model

    @property
    def is_llm_configured(self) -> bool:
        return bool(self.llm_api_key)

    def validate_for_production(self) -> list[str]:
        """프로덕션 환경에서 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if not self.is_llm_configured and not self.portfolio_fallback_enabled:
            errors.append(f"{self.llm_provider.upper()}_API_KEY")
        return errors

    @model_validator(mode="after")
    def validate_provider(self):
        """지원하는 LLM 프로바이더인지 검증"""
        if self.llm_provider not in ("gemini", "openai"):
            raise ValueError(f"지원하지 않는 LLM 프로바이더: {self.llm_provider}")
        if self.max_upload_bytes <= 0:
            raise ValueError("MAX_UPLOAD_BYTES는 양수여야 합니다")
        return self


settings = Settings()


def get_settings() -> Settings:
    """요청 핸들러에 주입할 설정 반환"""
    return settings
