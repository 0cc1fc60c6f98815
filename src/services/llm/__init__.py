from src.services.llm.base import CompletionOptions, InlineComment, LLMProvider
from src.services.llm.protocol import ReviewFinding, parse_findings, serialize_findings
from src.services.llm.router import get_provider

__all__ = [
    "CompletionOptions",
    "InlineComment",
    "LLMProvider",
    "ReviewFinding",
    "get_provider",
    "parse_findings",
    "serialize_findings",
]
