"""
Prompts sent through /api/analyze.

The analysis prompt pins the exact JSON structure a Report is parsed from;
the chat prompt re-serializes a projection of the current reports on every
question, so no conversation state is kept anywhere else.
"""
import json
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from finanalyzer.schemas import Report

ANALYSIS_PROMPT = """You are a financial analyst. Analyze these financial accounts and provide a comprehensive report in JSON format ONLY. Do not include any preamble, explanation, or markdown formatting - return ONLY valid JSON.

The JSON should have this exact structure:
{
  "companyName": "string",
  "periodCovered": "string",
  "currentPeriod": "e.g., FY 2023 or Q3 2024",
  "previousPeriod": "e.g., FY 2022 or Q3 2023",
  "industry": "string (if identifiable)",
  "executiveSummary": "2-3 sentence overview",
  "onePageSummary": "Single paragraph capturing the essence of financial health, key highlights, and critical concerns",
  "creditRecommendation": {
    "decision": "APPROVE|DECLINE|CONDITIONAL",
    "confidence": "HIGH|MEDIUM|LOW",
    "reasoning": "brief explanation"
  },
  "keyMetrics": {
    "revenue": {"current": number, "previous": number, "change": "percentage string"},
    "netIncome": {"current": number, "previous": number, "change": "percentage string"},
    "totalAssets": {"current": number, "previous": number, "change": "percentage string"},
    "totalLiabilities": {"current": number, "previous": number, "change": "percentage string"},
    "equity": {"current": number, "previous": number, "change": "percentage string"},
    "cashFlow": {"current": number, "previous": number, "change": "percentage string"}
  },
  "ratios": {
    "currentRatio": number,
    "quickRatio": number,
    "debtToEquity": number,
    "returnOnAssets": number,
    "returnOnEquity": number,
    "profitMargin": number,
    "industryBenchmark": "comparison if possible"
  },
  "strengths": ["array of 3-5 key strengths"],
  "concerns": ["array of 3-5 key concerns or risks"],
  "trends": ["array of 3-4 notable trends across periods"]
}

If data for previous periods is not available, use null for previous values and changes. Extract all financial data in the company's reported currency. Be precise with numbers and clearly identify time periods."""


def analysis_messages(base64_pdf: str) -> List[Dict[str, Any]]:
    return [
        {
            "role": "user",
            "content": [
                {
                    "type": "document",
                    "source": {
                        "type": "base64",
                        "media_type": "application/pdf",
                        "data": base64_pdf,
                    },
                },
                {"type": "text", "text": ANALYSIS_PROMPT},
            ],
        }
    ]


def _dump(model: Optional[BaseModel]) -> Optional[Dict[str, Any]]:
    if model is None:
        return None
    return model.model_dump(by_alias=True, exclude_unset=True)


def chat_context(reports: Sequence[Report]) -> List[Dict[str, Any]]:
    return [
        {
            "company": r.company_name,
            "summary": r.executive_summary,
            "credit": _dump(r.credit_recommendation),
            "metrics": _dump(r.key_metrics),
        }
        for r in reports
    ]


def chat_messages(reports: Sequence[Report], question: str) -> List[Dict[str, Any]]:
    context = json.dumps(chat_context(reports))
    return [
        {
            "role": "user",
            "content": (
                f"You are a financial analyst assistant. Here is the analysis data: {context}\n\n"
                f"User question: {question}\n\n"
                "Provide a helpful response."
            ),
        }
    ]
