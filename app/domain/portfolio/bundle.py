import zipfile
from io import BytesIO

from app.domain.portfolio.schemas import GeneratedSite

BUNDLE_FILENAME = "portfolio-files.zip"

SITE_FILENAMES = {
    "html": "index.html",
    "css": "style.css",
    "js": "script.js",
}


def build_site_zip(site: GeneratedSite) -> BytesIO:
    """생성된 사이트 코드를 index.html/style.css/script.js ZIP으로 묶는다"""
    zip_buf = BytesIO()

    with zipfile.ZipFile(zip_buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for field, filename in SITE_FILENAMES.items():
            zf.writestr(filename, getattr(site, field))

    zip_buf.seek(0)
    return zip_buf
