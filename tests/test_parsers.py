import pytest

from app.core.exceptions import ErrorCode, ResponseParseError
from app.domain.portfolio.parsers import (
    extract_json_block,
    parse_generated_site,
    validate_generated_site,
)
from app.domain.portfolio.schemas import GeneratedSite


class TestExtractJsonBlock:
    """extract_json_block 함수 테스트."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('{"a": 1}', '{"a": 1}'),
            ('Here you go:\n{"a": 1}\nEnjoy!', '{"a": 1}'),
            ('```json\n{"a": {"b": 2}}\n```', '{"a": {"b": 2}}'),
            ("no braces at all", "no braces at all"),
            ("} backwards {", "} backwards {"),
        ],
        ids=["plain", "surrounding_text", "markdown_fence", "no_braces", "reversed"],
    )
    def test_extracts_outermost_braces(self, raw, expected):
        """첫 '{'부터 마지막 '}'까지 추출."""
        assert extract_json_block(raw) == expected


class TestParseGeneratedSite:
    """parse_generated_site 함수 테스트."""

    def test_parses_json_wrapped_in_prose(self):
        """설명 문장에 둘러싸인 JSON 파싱."""
        raw = 'Here you go:\n{"html":"<h1>x</h1>","css":"","js":""}\nEnjoy!'

        result = parse_generated_site(raw)

        assert result == GeneratedSite(html="<h1>x</h1>", css="", js="")

    def test_braces_inside_string_values(self):
        """문자열 값 안의 중괄호 처리."""
        raw = '{"html": "<h1>x</h1>", "css": "body { margin: 0; }", "js": "if (a) { b(); }"}'

        result = parse_generated_site(raw)

        assert result.css == "body { margin: 0; }"
        assert result.js == "if (a) { b(); }"

    def test_ignores_extra_keys(self):
        """추가 키는 무시."""
        raw = '{"html": "<p>hi</p>", "css": "", "js": "", "notes": "extra"}'

        result = parse_generated_site(raw)

        assert result.html == "<p>hi</p>"

    @pytest.mark.parametrize(
        "raw",
        [
            '{"html": "<h1>x</h1>", "js": ""}',
            '{"css": "", "js": ""}',
            '{"html": "<h1>x</h1>", "css": ""}',
        ],
        ids=["missing_css", "missing_html", "missing_js"],
    )
    def test_missing_key_raises(self, raw):
        """필수 키 누락 시 ResponseParseError."""
        with pytest.raises(ResponseParseError) as exc_info:
            parse_generated_site(raw)

        assert exc_info.value.error_code == ErrorCode.GENERATE_PARSE_ERROR
        assert exc_info.value.status_code == 500

    @pytest.mark.parametrize(
        "raw",
        [
            '{"html": "<h1>x</h1>", "css": 1, "js": ""}',
            '{"html": "<h1>x</h1>", "css": "", "js": null}',
            '{"html": ["<h1>x</h1>"], "css": "", "js": ""}',
        ],
        ids=["int_css", "null_js", "list_html"],
    )
    def test_non_string_value_raises(self, raw):
        """문자열이 아닌 값은 ResponseParseError."""
        with pytest.raises(ResponseParseError):
            parse_generated_site(raw)

    def test_empty_html_raises(self):
        """html이 비어 있으면 ResponseParseError."""
        with pytest.raises(ResponseParseError) as exc_info:
            parse_generated_site('{"html": "", "css": "a{}", "js": "x()"}')

        assert "html" in exc_info.value.detail

    @pytest.mark.parametrize(
        "raw",
        [
            "I could not generate the site.",
            '{"html": "<h1>x</h1>", "css": "", "js": ""',
            "{not json}",
            "",
        ],
        ids=["prose_only", "truncated", "invalid_json", "empty"],
    )
    def test_invalid_json_raises(self, raw):
        """JSON 파싱 실패 시 ResponseParseError."""
        with pytest.raises(ResponseParseError) as exc_info:
            parse_generated_site(raw)

        assert "JSONDecodeError" in exc_info.value.detail

    def test_message_does_not_leak_raw_output(self):
        """사용자 메시지에 모델 원문이 포함되지 않음."""
        raw = "SECRET-RAW-OUTPUT {broken"

        with pytest.raises(ResponseParseError) as exc_info:
            parse_generated_site(raw)

        assert "SECRET-RAW-OUTPUT" not in exc_info.value.message


class TestValidateGeneratedSite:
    """validate_generated_site 함수 테스트."""

    def test_accepts_generated_site_instance(self, sample_site):
        """GeneratedSite 인스턴스 검증."""
        assert validate_generated_site(sample_site) == sample_site

    def test_rejects_instance_with_empty_html(self):
        """구조화 출력으로 받은 빈 html 거부."""
        with pytest.raises(ResponseParseError):
            validate_generated_site(GeneratedSite(html="", css="", js=""))

    def test_rejects_non_object(self):
        """JSON 객체가 아니면 거부."""
        with pytest.raises(ResponseParseError):
            validate_generated_site(["html", "css", "js"])
