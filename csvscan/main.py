from typing import Any, Dict, Optional

from fastapi import FastAPI, UploadFile, File, HTTPException
from .models import ParseRequest, ParseResponse, HealthResponse
from .decoding import decode_bytes
from .errors import ConfigurationError, UnterminatedQuoteError
from .report import parse_text
from .rules import UPLOAD_SUFFIXES

app = FastAPI(
    title="csv-scanner",
    description="Parse mixed quoted/unquoted delimited text into records",
    version="0.1.0",
)


def _parse_or_422(text: str, delimiter: Optional[str], quote: Optional[str], strict: bool, encoding: Optional[Dict[str, Any]] = None):
    try:
        return parse_text(text, delimiter, quote, strict=strict, encoding=encoding)
    except (ConfigurationError, UnterminatedQuoteError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/parse", response_model=ParseResponse)
def parse(body: ParseRequest):
    return _parse_or_422(body.text, body.delimiter, body.quote, body.strict)


@app.post("/parse/file", response_model=ParseResponse)
async def parse_file(
    file: UploadFile = File(...),
    delimiter: str = "",
    quote: str = "",
    strict: bool = False,
):
    if not file.filename or not file.filename.lower().endswith(UPLOAD_SUFFIXES):
        raise HTTPException(status_code=422, detail="Only CSV, TSV or TXT files are supported")

    raw = await file.read()
    text, encoding = decode_bytes(raw)
    return _parse_or_422(text, delimiter, quote, strict, encoding=encoding)
