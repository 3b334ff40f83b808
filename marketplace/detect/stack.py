"""Project stack detection.

Inspects well-known marker files in a project directory and reports every
framework, language and tool it recognises, in a fixed order.
"""

from pathlib import Path
from typing import Union

from marketplace.core.logging import get_logger
from marketplace.detect.files import contains, has_any

logger = get_logger(__name__)

UNKNOWN = "unknown"

# Frameworks identified by their config file alone
CONFIG_MARKERS: list[tuple[str, tuple[str, ...]]] = [
    ("nextjs", ("next.config.js", "next.config.mjs", "next.config.ts")),
    ("nuxt", ("nuxt.config.js", "nuxt.config.ts")),
    ("vite", ("vite.config.js", "vite.config.ts")),
    ("angular", ("angular.json",)),
    ("svelte", ("svelte.config.js",)),
    ("remix", ("remix.config.js",)),
    ("astro", ("astro.config.mjs", "astro.config.js")),
]

# Quoted dependency names looked up in package.json
PACKAGE_JSON_DEPENDENCIES: list[tuple[str, str]] = [
    ("react", '"react"'),
    ("vue", '"vue"'),
    ("express", '"express"'),
    ("fastify", '"fastify"'),
    ("nestjs", '"nest"'),
    ("typescript", '"typescript"'),
]

PYTHON_MANIFESTS = ("requirements.txt", "pyproject.toml")
PYTHON_FRAMEWORKS = ("django", "flask", "fastapi")

PHP_FRAMEWORKS = ("laravel", "symfony")

DOCKER_MARKERS = ("Dockerfile", "docker-compose.yml", "docker-compose.yaml")


def _detect_python(root: Path) -> list[str]:
    if not has_any(root, *PYTHON_MANIFESTS):
        return []
    found = [
        framework
        for framework in PYTHON_FRAMEWORKS
        if any(contains(root / manifest, framework, ignore_case=True) for manifest in PYTHON_MANIFESTS)
    ]
    found.append("python")
    return found


def _detect_ruby(root: Path) -> list[str]:
    gemfile = root / "Gemfile"
    if not gemfile.is_file():
        return []
    return (["rails"] if contains(gemfile, "rails") else []) + ["ruby"]


def _detect_php(root: Path) -> list[str]:
    composer = root / "composer.json"
    if not composer.is_file():
        return []
    return [framework for framework in PHP_FRAMEWORKS if contains(composer, framework)] + ["php"]


def detect_stack(path: Union[str, Path] = ".") -> list[str]:
    """Detect the technology stack of a project.

    Args:
        path: Project directory

    Returns:
        Matched identifiers in detection order, or ``["unknown"]``
    """
    root = Path(path)
    frameworks: list[str] = []

    for framework, markers in CONFIG_MARKERS:
        if has_any(root, *markers):
            frameworks.append(framework)

    package_json = root / "package.json"
    if package_json.is_file():
        frameworks.extend(
            framework for framework, needle in PACKAGE_JSON_DEPENDENCIES if contains(package_json, needle)
        )

    frameworks.extend(_detect_python(root))
    frameworks.extend(_detect_ruby(root))

    if has_any(root, "go.mod"):
        frameworks.append("go")
    if has_any(root, "Cargo.toml"):
        frameworks.append("rust")

    frameworks.extend(_detect_php(root))

    if has_any(root, "pubspec.yaml"):
        frameworks.append("flutter")
    if contains(root / "app.json", "expo"):
        frameworks.append("expo")
    if has_any(root, *DOCKER_MARKERS):
        frameworks.append("docker")

    if not frameworks:
        frameworks = [UNKNOWN]

    logger.info("stack_detected", path=str(root), frameworks=frameworks)
    return frameworks


def format_frameworks(frameworks: list[str]) -> str:
    """Render detected frameworks as a space separated string."""
    return " ".join(frameworks) if frameworks else UNKNOWN
