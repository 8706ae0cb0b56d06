"""Emailing a PDF report through the server."""

import base64
from typing import Protocol

from fintrack.errors import ApiError, ExportError
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)


class Mailer(Protocol):
    def send_report(self, base64_pdf: str) -> str: ...


def encode_pdf(pdf_bytes: bytes) -> str:
    """Base64-encode a PDF for a JSON request body."""
    return base64.b64encode(pdf_bytes).decode("ascii")


def send_pdf_report(mailer: Mailer, pdf_bytes: bytes) -> str:
    """Encode a rendered PDF and hand it to the mail collaborator.

    Returns:
        The server's confirmation message.

    Raises:
        ExportError: If the PDF is empty or the server rejects it.
    """
    if not pdf_bytes:
        raise ExportError("Refusing to send an empty report")
    payload = encode_pdf(pdf_bytes)
    logger.info("Sending report (%d bytes encoded)", len(payload))
    try:
        return mailer.send_report(payload)
    except ApiError as e:
        raise ExportError(f"Could not send report: {e}") from e
