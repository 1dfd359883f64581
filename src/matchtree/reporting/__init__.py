from matchtree.reporting.base import Formatter, ReportContext
from matchtree.reporting.html import HtmlFormatter
from matchtree.reporting.junit import JunitFormatter
from matchtree.reporting.structured import JsonFormatter, load_report, parse_report
from matchtree.reporting.text import TextFormatter

_FORMATTERS: dict[str, type[Formatter]] = {
    "text": TextFormatter,
    "json": JsonFormatter,
    "junit": JunitFormatter,
    "html": HtmlFormatter,
}


def get_formatter(formatter_name: str) -> Formatter:
    cls = _FORMATTERS.get(formatter_name)
    if cls is None:
        raise ValueError(
            f"Unknown formatter: {formatter_name!r}. "
            f"Available: {', '.join(sorted(_FORMATTERS))}"
        )
    return cls()


__all__ = [
    "Formatter",
    "HtmlFormatter",
    "JsonFormatter",
    "JunitFormatter",
    "ReportContext",
    "TextFormatter",
    "get_formatter",
    "load_report",
    "parse_report",
]
