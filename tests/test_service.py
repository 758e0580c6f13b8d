import pytest

from app.core.exceptions import ErrorCode, ExtractionError
from app.domain.portfolio.service import build_portfolio_prompt, extract_resume_text


class TestExtractResumeText:
    """extract_resume_text 함수 테스트."""

    @pytest.mark.asyncio
    async def test_extracts_text(self, sample_pdf_bytes):
        """텍스트가 있는 PDF에서 텍스트 추출."""
        text = await extract_resume_text(sample_pdf_bytes)

        assert "Jane Doe" in text
        assert "Software Engineer" in text
        assert "jane.doe@example.com" in text

    @pytest.mark.asyncio
    async def test_blank_pdf_raises(self, blank_pdf_bytes):
        """텍스트가 없는 PDF는 ExtractionError."""
        with pytest.raises(ExtractionError) as exc_info:
            await extract_resume_text(blank_pdf_bytes)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == ErrorCode.PDF_EXTRACTION_FAILED
        assert "image-based" in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [b"not a pdf at all", b"", b"%PDF-1.4\n%%EOF"],
        ids=["garbage", "empty", "truncated"],
    )
    async def test_corrupted_pdf_raises(self, content):
        """읽을 수 없는 PDF는 ExtractionError."""
        with pytest.raises(ExtractionError) as exc_info:
            await extract_resume_text(content)

        assert exc_info.value.status_code == 400


class TestBuildPortfolioPrompt:
    """build_portfolio_prompt 함수 테스트."""

    def test_embeds_resume_text_in_delimited_block(self):
        """이력서 텍스트가 구분 블록 안에 그대로 포함됨."""
        prompt = build_portfolio_prompt("Jane Doe\nEngineer")

        assert 'Resume Text:\n"""\nJane Doe\nEngineer\n"""' in prompt

    def test_without_instructions_omits_block(self):
        """지시사항이 없으면 지시사항 블록 생략."""
        prompt = build_portfolio_prompt("Jane Doe")

        assert "Custom Instructions from User" not in prompt

    @pytest.mark.parametrize("instructions", [None, "", "   "], ids=["none", "empty", "blank"])
    def test_blank_instructions_omitted(self, instructions):
        """빈 지시사항은 블록을 만들지 않음."""
        prompt = build_portfolio_prompt("Jane Doe", instructions)

        assert "Custom Instructions from User" not in prompt

    def test_with_instructions_adds_separate_block(self):
        """지시사항은 별도 구분 블록으로 포함됨."""
        prompt = build_portfolio_prompt("Jane Doe", "Use a dark theme")

        assert 'Custom Instructions from User:\n"""\nUse a dark theme\n"""' in prompt
        assert prompt.index("Resume Text:") < prompt.index("Custom Instructions from User:")
        assert prompt.index("Custom Instructions from User:") < prompt.index("Requirements:")

    def test_lists_structural_requirements(self):
        """섹션 구성과 출력 형식 요구사항 포함."""
        prompt = build_portfolio_prompt("Jane Doe")

        for section in ["Header", "Contact Information", "Summary", "Experience", "Education", "Skills", "Projects"]:
            assert section in prompt
        assert "responsive" in prompt
        assert '"html", "css", and "js"' in prompt
        assert "ONLY the JSON object" in prompt

    def test_example_json_braces_are_unescaped(self):
        """예시 JSON의 중괄호가 그대로 출력됨."""
        prompt = build_portfolio_prompt("Jane Doe")

        assert '"css": "body { ... }"' in prompt
        assert "{{" not in prompt

    def test_resume_text_with_braces_is_kept_verbatim(self):
        """이력서 텍스트의 중괄호/포맷 문자열은 치환되지 않음."""
        resume_text = "Skills: {python} {resume_text} 100%"

        prompt = build_portfolio_prompt(resume_text)

        assert resume_text in prompt
