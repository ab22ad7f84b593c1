import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from finanalyzer import llm
from finanalyzer.errors import UpstreamError
from finanalyzer.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    ModelListResponse,
    TextContent,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze(payload: AnalyzeRequest):
    """
    Forward a message list to Gemini and hand back the first text candidate
    in the uniform ``{content: [{type: "text", text}]}`` shape.
    """
    try:
        text = llm.generate(payload.messages, system=payload.system)
    except ValueError as e:
        # bad document block (not base64, missing source)
        return _error(400, "Invalid request body", str(e))
    except UpstreamError as e:
        logger.error("Analyze request failed: %s", e)
        return _error(500, "Failed to generate content", str(e))
    except Exception as e:
        logger.exception("Unexpected error in /api/analyze")
        return _error(500, "Failed to generate content", str(e))

    return AnalyzeResponse(content=[TextContent(text=text)])


@router.get("/models", response_model=ModelListResponse)
def list_models():
    """List the model names the configured key can see."""
    try:
        names = llm.list_model_names()
    except UpstreamError as e:
        return _error(500, "Failed to list models", str(e))
    return ModelListResponse(models=names)
