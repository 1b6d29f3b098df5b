from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from .rules import DEFAULT_QUOTE


class ParseRequest(BaseModel):
    text: str
    # empty delimiter means tab, empty quote means the default quote
    delimiter: str = Field(default="", examples=[","])
    quote: str = Field(default=DEFAULT_QUOTE, examples=[DEFAULT_QUOTE])
    strict: bool = False


class Dialect(BaseModel):
    delimiter: str
    quote: str
    strict: bool = False


class ParseSummary(BaseModel):
    records: int = 0
    fields: int = 0
    max_fields: int = 0
    empty_records: int = 0


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False
    size_bytes: int
    sha256: str


class ParseResponse(BaseModel):
    records: List[List[str]]
    summary: ParseSummary
    dialect: Dialect
    encoding: Optional[EncodingReport] = None


class HealthResponse(BaseModel):
    ok: bool = True
