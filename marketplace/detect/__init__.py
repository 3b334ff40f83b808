"""Framework detection for target projects."""

from marketplace.detect.stack import detect_stack, format_frameworks
from marketplace.detect.web import detect_web_framework

__all__ = ["detect_stack", "detect_web_framework", "format_frameworks"]
