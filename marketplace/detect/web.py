"""Web framework detection from a project's package.json."""

from pathlib import Path
from typing import Union

from marketplace.core.logging import get_logger
from marketplace.detect.files import read_text

logger = get_logger(__name__)

UNKNOWN = "unknown"

# Most specific first: meta-frameworks also depend on react or vue
WEB_FRAMEWORKS: list[tuple[str, str]] = [
    ("nextjs", '"next"'),
    ("nuxt", '"nuxt"'),
    ("sveltekit", '"@sveltejs/kit"'),
    ("remix", '"@remix-run'),
    ("astro", '"astro"'),
    ("gatsby", '"gatsby"'),
    ("react", '"react"'),
    ("vue", '"vue"'),
]


def detect_web_framework(package_json: Union[str, Path] = "package.json") -> str:
    """Detect the web framework a project is built on.

    Args:
        package_json: Path to package.json, or a directory containing one

    Returns:
        Framework identifier, ``"unknown"`` if none matches
    """
    path = Path(package_json)
    if path.is_dir():
        path = path / "package.json"
    if not path.is_file():
        logger.info("package_json_not_found", path=str(path))
        return UNKNOWN

    text = read_text(path)
    for framework, needle in WEB_FRAMEWORKS:
        if needle in text:
            logger.info("web_framework_detected", path=str(path), framework=framework)
            return framework
    return UNKNOWN
