from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from finanalyzer import llm
from finanalyzer.config import settings
from finanalyzer.main import app


SAMPLE_REPORT = {
    "companyName": "Acme Widgets Ltd",
    "periodCovered": "Years ended 31 December 2023 and 2022",
    "currentPeriod": "FY 2023",
    "previousPeriod": "FY 2022",
    "industry": "Manufacturing",
    "executiveSummary": "Revenue grew while margins held steady.",
    "onePageSummary": "Acme grew revenue 12% with stable margins and modest leverage.",
    "creditRecommendation": {
        "decision": "APPROVE",
        "confidence": "HIGH",
        "reasoning": "Strong cash generation and low leverage.",
    },
    "keyMetrics": {
        "revenue": {"current": 1200000, "previous": 1071428, "change": "12%"},
        "netIncome": {"current": 150000, "previous": 140000, "change": "7.1%"},
        "totalAssets": {"current": 900000, "previous": 850000, "change": "5.9%"},
        "totalLiabilities": {"current": 400000, "previous": 410000, "change": "-2.4%"},
        "equity": {"current": 500000, "previous": 440000, "change": "13.6%"},
        "cashFlow": {"current": 180000, "previous": None, "change": None},
    },
    "ratios": {
        "currentRatio": 1.8,
        "quickRatio": 1.2,
        "debtToEquity": 0.8,
        "returnOnAssets": 16.7,
        "returnOnEquity": 30.0,
        "profitMargin": 12.5,
        "industryBenchmark": "Above sector median",
    },
    "strengths": ["Revenue growth", "Low leverage", "Healthy liquidity"],
    "concerns": ["Customer concentration", "Rising input costs", "FX exposure"],
    "trends": ["Growing top line", "Stable margins", "Deleveraging"],
}


def gemini_response(*texts):
    parts = [SimpleNamespace(text=t) for t in texts]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


class FakeGenerativeModel:
    """Stands in for genai.GenerativeModel; records every call."""

    calls = []
    response = None
    error = None

    def __init__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction

    def generate_content(self, contents, generation_config=None):
        FakeGenerativeModel.calls.append(
            {
                "model_name": self.model_name,
                "system_instruction": self.system_instruction,
                "contents": contents,
                "generation_config": generation_config,
            }
        )
        if FakeGenerativeModel.error is not None:
            raise FakeGenerativeModel.error
        return FakeGenerativeModel.response


@pytest.fixture
def fake_gemini(monkeypatch):
    FakeGenerativeModel.calls = []
    FakeGenerativeModel.response = gemini_response("hello from gemini")
    FakeGenerativeModel.error = None
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(llm.genai, "GenerativeModel", FakeGenerativeModel)
    return FakeGenerativeModel


@pytest.fixture
def client():
    return TestClient(app)


class FakeProxyClient:
    """Replays canned /api/analyze responses (or raises them) in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def analyze(self, messages, system=None):
        self.calls.append(messages)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def text_response(text):
    return {"content": [{"type": "text", "text": text}]}
