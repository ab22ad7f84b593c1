from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Literal, Union


# ---- Proxy wire schema (/api/analyze) ----

class DocumentSource(BaseModel):
    type: Literal["base64"] = "base64"
    media_type: str = "application/pdf"
    data: str


class ContentBlock(BaseModel):
    type: Literal["text", "document"]
    text: Optional[str] = None
    source: Optional[DocumentSource] = None


class ProxyMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: Union[str, List[ContentBlock]]


class AnalyzeRequest(BaseModel):
    # model / max_tokens sent by older clients are ignored
    model_config = ConfigDict(extra="ignore")

    messages: List[ProxyMessage]
    system: Optional[str] = None


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class AnalyzeResponse(BaseModel):
    content: List[TextContent]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None


class ModelListResponse(BaseModel):
    models: List[str]


# ---- Report (as returned by the model) ----

# The model is asked for numbers but sometimes answers "N/A" or "n/m"
Scalar = Optional[Union[float, str]]


class _Camel(BaseModel):
    # Keep whatever the model sends, accept both camelCase and snake_case
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class CreditRecommendation(_Camel):
    decision: Optional[str] = None  # "APPROVE" | "DECLINE" | "CONDITIONAL"
    confidence: Optional[str] = None  # "HIGH" | "MEDIUM" | "LOW"
    reasoning: Optional[str] = None


class MetricValue(_Camel):
    current: Scalar = None
    previous: Scalar = None
    change: Scalar = None


class KeyMetrics(_Camel):
    revenue: Optional[MetricValue] = None
    net_income: Optional[MetricValue] = Field(default=None, alias="netIncome")
    total_assets: Optional[MetricValue] = Field(default=None, alias="totalAssets")
    total_liabilities: Optional[MetricValue] = Field(default=None, alias="totalLiabilities")
    equity: Optional[MetricValue] = None
    cash_flow: Optional[MetricValue] = Field(default=None, alias="cashFlow")


class Ratios(_Camel):
    current_ratio: Scalar = Field(default=None, alias="currentRatio")
    quick_ratio: Scalar = Field(default=None, alias="quickRatio")
    debt_to_equity: Scalar = Field(default=None, alias="debtToEquity")
    return_on_assets: Scalar = Field(default=None, alias="returnOnAssets")
    return_on_equity: Scalar = Field(default=None, alias="returnOnEquity")
    profit_margin: Scalar = Field(default=None, alias="profitMargin")
    industry_benchmark: Scalar = Field(default=None, alias="industryBenchmark")


class Report(_Camel):
    file_name: Optional[str] = Field(default=None, alias="fileName")
    company_name: Optional[str] = Field(default=None, alias="companyName")
    period_covered: Optional[str] = Field(default=None, alias="periodCovered")
    current_period: Optional[str] = Field(default=None, alias="currentPeriod")
    previous_period: Optional[str] = Field(default=None, alias="previousPeriod")
    industry: Optional[str] = None
    executive_summary: Optional[str] = Field(default=None, alias="executiveSummary")
    one_page_summary: Optional[str] = Field(default=None, alias="onePageSummary")
    credit_recommendation: Optional[CreditRecommendation] = Field(
        default=None, alias="creditRecommendation"
    )
    key_metrics: Optional[KeyMetrics] = Field(default=None, alias="keyMetrics")
    ratios: Optional[Ratios] = None
    strengths: Optional[List[Any]] = None
    concerns: Optional[List[Any]] = None
    trends: Optional[List[Any]] = None

    # Null-safe views used for rendering; the fields above stay verbatim
    @property
    def credit(self) -> CreditRecommendation:
        return self.credit_recommendation or CreditRecommendation()

    @property
    def metrics(self) -> KeyMetrics:
        return self.key_metrics or KeyMetrics()

    @property
    def ratio_values(self) -> Ratios:
        return self.ratios or Ratios()

    @property
    def summary(self) -> Optional[str]:
        return self.one_page_summary or self.executive_summary

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


# ---- Chart data ----

class ChartSeries(BaseModel):
    label: str
    values: List[float]


class ChartData(BaseModel):
    chart_type: Optional[Literal["line", "bar", "pie"]] = "line"
    periods: List[str]
    series: List[ChartSeries]
