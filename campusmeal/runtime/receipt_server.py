"""FastAPI server that renders receipts to PDF."""

import re
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from campusmeal.domain.parsing import ResponseSchemaError, parse_payment_receipt
from campusmeal.receipt.lines import payment_receipt_lines
from campusmeal.receipt.pdf import encode, lines_per_page
from campusmeal.runtime.logging import get_logger
from campusmeal.runtime.settings import get_settings

logger = get_logger(__name__)

DEFAULT_FILENAME = "receipt.pdf"
_SAFE_FILENAME = re.compile(r"^[A-Za-z0-9._-]+\.pdf$")

app = FastAPI(title="Receipt Renderer")


def _error(message: str, status_code: int = 422) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


def _pdf_response(lines: list[str], filename: str) -> Response:
    if len(lines) > lines_per_page():
        logger.warning("Receipt has %d lines; only %d fit on the page", len(lines), lines_per_page())
    return Response(
        content=encode(lines),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


@app.post("/receipt")
async def render_receipt(request: Request) -> Response:
    """Render ``{"lines": [...], "filename": "..."}`` as a one-page PDF."""
    body = await _json_body(request)
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object")

    lines = body.get("lines")
    if not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
        return _error("'lines' must be a list of strings")

    filename = body.get("filename") or DEFAULT_FILENAME
    if not isinstance(filename, str) or not _SAFE_FILENAME.match(filename):
        return _error("'filename' must be a plain name ending in .pdf")

    logger.debug("Rendering %d receipt lines as %s", len(lines), filename)
    return _pdf_response(lines, filename)


@app.post("/receipt/payment")
async def render_payment_receipt(request: Request) -> Response:
    """Render a payment confirmation summary as a one-page PDF."""
    body = await _json_body(request)
    try:
        receipt = parse_payment_receipt(body, get_settings().meal_catalog)
    except ResponseSchemaError as e:
        return _error(str(e))

    filename = f"payment-{receipt.timestamp.strftime('%Y%m%d_%H%M%S')}.pdf"
    return _pdf_response(payment_receipt_lines(receipt), filename)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
