"""
정규식 기반 기본 포트폴리오 생성기

LLM 자격 증명이 없고 PORTFOLIO_FALLBACK_ENABLED가 켜져 있을 때만 사용된다.
이름/직함/연락처/요약 정도만 추출하므로 품질은 LLM 생성 결과보다 낮다.
"""

import html
import re

from app.core.logging import get_logger
from app.domain.portfolio.schemas import ContactInfo, GeneratedSite, StructuredResume

logger = get_logger(__name__)

TITLE_KEYWORDS = (
    "Software Engineer",
    "Developer",
    "Designer",
    "Manager",
    "Analyst",
    "Specialist",
    "Consultant",
)

NAME_PATTERN = re.compile(r"^([^\n\r]{5,50})$", re.MULTILINE)
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"(\(\d{3}\)|\d{3})[- .]?\d{3}[- .]?\d{4}")
LINKEDIN_PATTERN = re.compile(r"linkedin\.com/in/[a-zA-Z0-9_-]+")
GITHUB_PATTERN = re.compile(r"github\.com/[a-zA-Z0-9_-]+")
SUMMARY_PATTERN = re.compile(
    r"(Summary|Profile|About Me)([\s\S]*?)(Experience|Skills|Projects|Education)",
    re.IGNORECASE,
)
SKILLS_PATTERN = re.compile(
    r"^[ \t]*(?:Technical )?Skills[ \t]*:?([\s\S]*?)"
    r"(?=^[ \t]*(?:Experience|Projects|Education|Certifications)\b|\Z)",
    re.IGNORECASE | re.MULTILINE,
)

DEFAULT_NAME = "Your Name"
DEFAULT_TITLE = "Professional Portfolio"
DEFAULT_SUMMARY = "A brief professional summary."
MAX_SKILLS = 20


def _first_match(pattern: re.Pattern, text: str) -> str | None:
    match = pattern.search(text)
    return match.group(0).strip() if match else None


def _extract_title(text: str) -> str | None:
    for keyword in TITLE_KEYWORDS:
        match = re.search(rf"^.*{re.escape(keyword)}.*$", text, re.IGNORECASE | re.MULTILINE)
        if match:
            return match.group(0).strip()
    return None


def _extract_skills(text: str) -> list[str]:
    match = SKILLS_PATTERN.search(text)
    if not match:
        return []

    skills = []
    for item in re.split(r"[,\n•·|;]", match.group(1)):
        item = item.strip(" -*\t")
        if item and item not in skills:
            skills.append(item)
    return skills[:MAX_SKILLS]


def parse_structured_resume(text: str) -> StructuredResume:
    """이력서 텍스트에서 이름, 직함, 연락처, 요약, 기술 추출"""
    name_match = NAME_PATTERN.search(text)
    summary_match = SUMMARY_PATTERN.search(text)

    resume = StructuredResume(
        name=name_match.group(1).strip() if name_match else DEFAULT_NAME,
        title=_extract_title(text) or DEFAULT_TITLE,
        contact=ContactInfo(
            email=_first_match(EMAIL_PATTERN, text),
            phone=_first_match(PHONE_PATTERN, text),
            linkedin=_first_match(LINKEDIN_PATTERN, text),
            github=_first_match(GITHUB_PATTERN, text),
        ),
        summary=(summary_match.group(2).strip() if summary_match else "") or DEFAULT_SUMMARY,
        skills=_extract_skills(text),
    )

    logger.info(
        "정규식 이력서 추출 완료",
        has_email=resume.contact.email is not None,
        skills=len(resume.skills),
    )
    return resume


def _render_contact(contact: ContactInfo) -> str:
    lines = []
    if contact.email:
        email = html.escape(contact.email)
        lines.append(f'<p>Email: <a href="mailto:{email}">{email}</a></p>')
    if contact.phone:
        lines.append(f"<p>Phone: {html.escape(contact.phone)}</p>")
    for label, value in (("LinkedIn", contact.linkedin), ("GitHub", contact.github)):
        if value:
            link = html.escape(value)
            lines.append(
                f'<p>{label}: <a href="https://{link}" target="_blank" rel="noopener">{link}</a></p>'
            )
    if not lines:
        lines.append("<p>Contact details were not found in the resume.</p>")
    return "\n            ".join(lines)


def render_html(resume: StructuredResume) -> str:
    name = html.escape(resume.name)
    title = html.escape(resume.title)
    summary = html.escape(resume.summary)
    skills = "".join(f"<li>{html.escape(s)}</li>" for s in resume.skills)
    skills_section = (
        f"""
        <section id="skills">
            <h3>Skills</h3>
            <ul>{skills}</ul>
        </section>"""
        if skills
        else ""
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <link rel="stylesheet" href="style.css">
</head>
<body>
    <header>
        <h1>{name}</h1>
        <h2>{title}</h2>
    </header>
    <main>
        <section id="contact">
            <h3>Contact</h3>
            {_render_contact(resume.contact)}
        </section>
        <section id="summary">
            <h3>Summary</h3>
            <p>{summary}</p>
        </section>{skills_section}
    </main>
    <footer>
        <p>Generated by Resume to Portfolio</p>
    </footer>
    <script src="script.js"></script>
</body>
</html>
"""


FALLBACK_CSS = """body {
    font-family: 'Lato', sans-serif;
    line-height: 1.6;
    margin: 0;
    background-color: #f4f4f4;
    color: #333;
}
header {
    background: #333;
    color: #fff;
    padding: 1rem 0;
    text-align: center;
}
header h1 {
    margin: 0;
    font-size: 2.5rem;
}
header h2 {
    margin: 0;
    font-size: 1.5rem;
    font-weight: 300;
}
main {
    padding: 20px;
    max-width: 800px;
    margin: 20px auto;
    background: #fff;
    border-radius: 8px;
    box-shadow: 0 0 10px rgba(0, 0, 0, 0.1);
}
section {
    margin-bottom: 20px;
    padding-bottom: 20px;
    border-bottom: 1px solid #eee;
}
section:last-child {
    border-bottom: none;
}
ul {
    list-style: none;
    padding: 0;
}
ul li {
    display: inline-block;
    background: #eef;
    padding: 4px 10px;
    margin: 0 6px 6px 0;
    border-radius: 12px;
}
footer {
    text-align: center;
    padding: 20px;
    background: #333;
    color: #fff;
}
a {
    color: #3498db;
    text-decoration: none;
}
a:hover {
    text-decoration: underline;
}
@media (max-width: 600px) {
    main {
        margin: 0;
        border-radius: 0;
    }
}
"""

FALLBACK_JS = """document.querySelectorAll('a[href^="#"]').forEach(function (anchor) {
    anchor.addEventListener('click', function (e) {
        e.preventDefault();
        document.querySelector(this.getAttribute('href')).scrollIntoView({ behavior: 'smooth' });
    });
});
"""


def render_fallback_site(resume_text: str) -> GeneratedSite:
    """이력서 텍스트로 기본 포트폴리오 사이트 생성"""
    resume = parse_structured_resume(resume_text)
    return GeneratedSite(html=render_html(resume), css=FALLBACK_CSS, js=FALLBACK_JS)
