import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

import google.generativeai as genai

from finanalyzer.config import settings
from finanalyzer.errors import UpstreamError
from finanalyzer.schemas import ProxyMessage

genai.configure(api_key=settings.GEMINI_API_KEY)
logger = logging.getLogger(__name__)

# Gemini calls the assistant side of a conversation "model"
ROLE_MAP = {"user": "user", "assistant": "model"}


def _to_parts(message: ProxyMessage) -> List[Dict[str, Any]]:
    if isinstance(message.content, str):
        return [{"text": message.content}]

    parts: List[Dict[str, Any]] = []
    for block in message.content:
        if block.type == "text":
            parts.append({"text": block.text or ""})
        elif block.type == "document":
            if block.source is None:
                raise ValueError("document block without a source")
            try:
                data = base64.b64decode(block.source.data, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ValueError(f"document block is not valid base64: {e}") from e
            parts.append(
                {
                    "inline_data": {
                        "mime_type": block.source.media_type,
                        "data": data,
                    }
                }
            )
    return parts


def build_contents(messages: List[ProxyMessage]) -> List[Dict[str, Any]]:
    """
    Translate proxy messages into Gemini ``contents``:
    [{"role": "user" | "model", "parts": [{"text": ...} | {"inline_data": ...}]}]
    """
    return [
        {"role": ROLE_MAP[m.role], "parts": _to_parts(m)}
        for m in messages
    ]


def first_candidate_text(response: Any) -> str:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise UpstreamError("No candidates returned from Gemini")

    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        text = getattr(part, "text", None)
        if text:
            return text
    raise UpstreamError("Gemini candidate contained no text")


def generate(messages: List[ProxyMessage], system: Optional[str] = None) -> str:
    if not settings.GEMINI_API_KEY:
        raise UpstreamError("GEMINI_API_KEY is not configured")

    contents = build_contents(messages)
    model = genai.GenerativeModel(
        model_name=settings.GEMINI_MODEL,
        system_instruction=system or None,
    )
    logger.info(
        "Calling %s with %d message(s), max_output_tokens=%d",
        settings.GEMINI_MODEL,
        len(contents),
        settings.GEMINI_MAX_OUTPUT_TOKENS,
    )
    try:
        response = model.generate_content(
            contents,
            generation_config={"max_output_tokens": settings.GEMINI_MAX_OUTPUT_TOKENS},
        )
    except Exception as e:
        logger.exception("Gemini call failed")
        raise UpstreamError(f"Gemini call failed: {e}") from e

    return first_candidate_text(response)


def list_model_names() -> List[str]:
    if not settings.GEMINI_API_KEY:
        raise UpstreamError("GEMINI_API_KEY is not configured")
    try:
        return [m.name for m in genai.list_models()]
    except Exception as e:
        logger.exception("Gemini model listing failed")
        raise UpstreamError(f"Gemini model listing failed: {e}") from e
