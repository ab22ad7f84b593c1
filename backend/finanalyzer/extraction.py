import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from finanalyzer.errors import ReportFormatError
from finanalyzer.schemas import Report

logger = logging.getLogger(__name__)

# Greedy: first "{" through the last "}" in the reply, across lines
JSON_BLOB_RE = re.compile(r"\{.*\}", re.DOTALL)


def extract_text(response: Dict[str, Any]) -> str:
    """Join the text blocks of an /api/analyze response."""
    blocks = response.get("content") if isinstance(response, dict) else None
    if not isinstance(blocks, list):
        raise ReportFormatError("Invalid response format from API")
    return "\n".join(
        block.get("text", "")
        for block in blocks
        if isinstance(block, dict) and block.get("type") == "text"
    )


def extract_json_blob(text: str) -> Dict[str, Any]:
    m = JSON_BLOB_RE.search(text)
    if not m:
        logger.error("No JSON object in model reply: %r", text[:500])
        raise ReportFormatError("Invalid response format from API")

    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError as e:
        logger.error("Could not parse JSON from model reply: %s", e)
        raise ReportFormatError(f"Invalid JSON in API response: {e}") from e

    if not isinstance(data, dict):
        raise ReportFormatError("Invalid response format from API")
    return data


def parse_report(text: str, file_name: str) -> Report:
    """
    Build a Report from the model's free-form reply. The reply's JSON is
    taken as-is; ``fileName`` is added so the UI can tell reports apart.
    """
    data = extract_json_blob(text)
    try:
        return Report.model_validate({"fileName": file_name, **data})
    except ValidationError as e:
        raise ReportFormatError(f"Unexpected report shape: {e.error_count()} invalid field(s)") from e
