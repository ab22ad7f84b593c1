"""
Rendering and export helpers for a single Report.

Everything here works on the Report as the model returned it: nothing is
recomputed, missing values fall back to ``N/A`` (or 0 in the CSV and chart
series).
"""
import logging
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import quote

from jinja2 import Environment

from finanalyzer.schemas import ChartData, ChartSeries, MetricValue, Report

logger = logging.getLogger(__name__)

NA = "N/A"

_env = Environment(autoescape=True)

HTML_TEMPLATE = _env.from_string(
    '<!DOCTYPE html><html><head><meta charset="utf-8">'
    "<title>Financial Analysis - {{ company }}</title></head><body>"
    "<h1>Financial Analysis Report</h1>"
    "<h2>{{ company }}</h2>"
    "<p><strong>Period:</strong> {{ period }}</p>"
    "<h2>Executive Summary</h2><p>{{ summary }}</p>"
    "<h2>Credit Decision: {{ decision }}</h2><p>{{ reasoning }}</p>"
    "</body></html>"
)

# encodeURIComponent leaves these unescaped
_URI_SAFE = "-_.!~*'()"


def _display(value: Any) -> str:
    return NA if value is None else str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_currency(value: Any) -> str:
    if value is None:
        return NA
    if not _is_number(value):
        return str(value)
    # half away from zero, like Intl.NumberFormat
    rounded = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{rounded:,}"


def format_ratio(value: Any) -> str:
    if value is None:
        return NA
    if _is_number(value):
        return f"{value:.2f}"
    return str(value)


def company_label(report: Report) -> str:
    return report.company_name or "Unknown"


def safe_filename(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", name, flags=re.IGNORECASE)


def html_filename(report: Report) -> str:
    return f"{safe_filename(company_label(report))}_Analysis.html"


def csv_filename(report: Report) -> str:
    return f"{safe_filename(company_label(report))}_Analysis.csv"


def report_html(report: Report) -> str:
    credit = report.credit
    return HTML_TEMPLATE.render(
        company=company_label(report),
        period=_display(report.period_covered),
        summary=_display(report.summary),
        decision=_display(credit.decision),
        reasoning=_display(credit.reasoning),
    )


def _csv_number(value: Any) -> str:
    if not value:
        return "0"
    if not _is_number(value):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def report_csv(report: Report, generated: Optional[date] = None) -> str:
    generated = generated or date.today()
    revenue = report.metrics.revenue or MetricValue()
    return (
        f"Financial Analysis Report - {company_label(report)}\n"
        f"Generated: {generated.month}/{generated.day}/{generated.year}\n"
        "\n"
        "KEY METRICS\n"
        "Metric,Current,Previous,Change\n"
        f"Revenue,{_csv_number(revenue.current)},{_csv_number(revenue.previous)},"
        f"{revenue.change or NA}\n"
    )


def mailto_link(report: Report) -> str:
    company = company_label(report)
    subject = quote(f"Financial Analysis: {company}", safe=_URI_SAFE)
    body = quote(
        f"Financial Analysis Report for {company}\n\n"
        f"Executive Summary:\n{_display(report.summary)}\n\n"
        f"Credit Decision: {_display(report.credit.decision)}",
        safe=_URI_SAFE,
    )
    return f"mailto:?subject={subject}&body={body}"


def save_export(content: str, filename: str, directory: Union[str, Path] = ".") -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def _chart_value(value: Any) -> float:
    return value if _is_number(value) else 0


def chart_data(report: Report) -> ChartData:
    """Revenue and net income for the previous and current period."""
    metrics = report.metrics
    revenue = metrics.revenue or MetricValue()
    net_income = metrics.net_income or MetricValue()
    return ChartData(
        chart_type="line",
        periods=[report.previous_period or "Previous", report.current_period or "Current"],
        series=[
            ChartSeries(
                label="Revenue",
                values=[_chart_value(revenue.previous), _chart_value(revenue.current)],
            ),
            ChartSeries(
                label="Net Income",
                values=[_chart_value(net_income.previous), _chart_value(net_income.current)],
            ),
        ],
    )


def credit_style(decision: Optional[str]) -> str:
    if decision == "APPROVE":
        return "✓"
    if decision == "DECLINE":
        return "✗"
    return "!"


def render_text(report: Report) -> str:
    """Plain-text report card for the terminal."""
    metrics = report.metrics
    credit = report.credit
    lines = [
        f"=== {company_label(report)} ({report.file_name or NA}) ===",
        f"Period: {_display(report.period_covered)}",
        "",
        "Executive Summary",
        _display(report.summary),
        "",
        "Key Metrics",
    ]
    for label, metric in (
        ("Revenue", metrics.revenue),
        ("Net Income", metrics.net_income),
        ("Total Assets", metrics.total_assets),
    ):
        metric = metric or MetricValue()
        change = f" ({metric.change})" if metric.change else ""
        lines.append(f"  {label}: {format_currency(metric.current)}{change}")
    lines.append(f"  Profit Margin: {format_ratio(report.ratio_values.profit_margin)}%")

    chart = chart_data(report)
    lines += ["", "Historical Trends"]
    for series in chart.series:
        points = ", ".join(
            f"{period}={format_currency(value)}" for period, value in zip(chart.periods, series.values)
        )
        lines.append(f"  {series.label}: {points}")

    lines += [
        "",
        f"{credit_style(credit.decision)} Credit Decision: {_display(credit.decision)}",
        _display(credit.reasoning),
        "",
        "Key Strengths",
    ]
    lines += [f"  ✓ {s}" for s in report.strengths or []]
    lines += ["", "Areas of Concern"]
    lines += [f"  ⚠ {c}" for c in report.concerns or []]
    return "\n".join(lines)
