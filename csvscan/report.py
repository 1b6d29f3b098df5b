"""
Glue between the HTTP layer and the parser.

Responsibilities:
- map form values to a dialect (empty delimiter -> tab, empty quote -> '"')
- run the parser
- build the response envelope with a small summary
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .parser import Parser
from .rules import DEFAULT_DELIMITER, DEFAULT_QUOTE


def resolve_dialect(delimiter: Optional[str], quote: Optional[str]) -> Tuple[str, str]:
    return delimiter or DEFAULT_DELIMITER, quote or DEFAULT_QUOTE


def summarize(records: List[List[str]]) -> Dict[str, int]:
    return {
        "records": len(records),
        "fields": sum(len(r) for r in records),
        "max_fields": max((len(r) for r in records), default=0),
        "empty_records": sum(1 for r in records if not r),
    }


def parse_text(
    text: str,
    delimiter: Optional[str],
    quote: Optional[str],
    strict: bool = False,
    encoding: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Parse text with the form's dialect settings.
    Returns a dict matching the API's response envelope.
    """
    delimiter, quote = resolve_dialect(delimiter, quote)
    parser = Parser(delimiter, quote, strict=strict)
    records = parser.parse(text)

    return {
        "records": records,
        "summary": summarize(records),
        "dialect": {"delimiter": delimiter, "quote": quote, "strict": strict},
        "encoding": encoding,
    }
