from datetime import date
from urllib.parse import unquote

from conftest import SAMPLE_REPORT
from finanalyzer import exports
from finanalyzer.schemas import Report


def make_report(**overrides):
    return Report.model_validate({"fileName": "acme.pdf", **SAMPLE_REPORT, **overrides})


def test_format_currency():
    assert exports.format_currency(None) == "N/A"
    assert exports.format_currency(1200000) == "1,200,000"
    assert exports.format_currency(0) == "0"


def test_format_ratio():
    assert exports.format_ratio(None) == "N/A"
    assert exports.format_ratio(1.8) == "1.80"
    assert exports.format_ratio("n/m") == "n/m"


def test_safe_filename_replaces_unsafe_characters():
    assert exports.safe_filename("Acme & Sons, Ltd.") == "Acme___Sons__Ltd_"
    assert exports.html_filename(make_report()) == "Acme_Widgets_Ltd_Analysis.html"
    assert exports.csv_filename(make_report()) == "Acme_Widgets_Ltd_Analysis.csv"


def test_report_html_contains_summary_and_decision():
    html = exports.report_html(make_report())
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Financial Analysis - Acme Widgets Ltd</title>" in html
    assert SAMPLE_REPORT["onePageSummary"] in html
    assert "Credit Decision: APPROVE" in html


def test_report_html_falls_back_to_executive_summary_and_escapes():
    html = exports.report_html(make_report(onePageSummary=None, companyName="<b>Evil</b>"))
    assert SAMPLE_REPORT["executiveSummary"] in html
    assert "<b>Evil</b>" not in html
    assert "&lt;b&gt;Evil&lt;/b&gt;" in html


def test_report_csv():
    csv = exports.report_csv(make_report(), generated=date(2024, 3, 7))
    assert csv == (
        "Financial Analysis Report - Acme Widgets Ltd\n"
        "Generated: 3/7/2024\n"
        "\n"
        "KEY METRICS\n"
        "Metric,Current,Previous,Change\n"
        "Revenue,1200000,1071428,12%\n"
    )


def test_report_csv_missing_revenue():
    report = make_report(keyMetrics={})
    assert exports.report_csv(report, generated=date(2024, 1, 1)).endswith("Revenue,0,0,N/A\n")


def test_mailto_link():
    link = exports.mailto_link(make_report())
    assert link.startswith("mailto:?subject=Financial%20Analysis%3A%20Acme%20Widgets%20Ltd&body=")
    body = unquote(link.split("&body=", 1)[1])
    assert body.startswith("Financial Analysis Report for Acme Widgets Ltd\n\nExecutive Summary:\n")
    assert body.endswith("Credit Decision: APPROVE")


def test_save_export_writes_file(tmp_path):
    path = exports.save_export("hello", "out.html", tmp_path / "reports")
    assert path.read_text(encoding="utf-8") == "hello"


def test_chart_data_uses_period_labels_and_zero_fallback():
    chart = exports.chart_data(make_report())
    assert chart.periods == ["FY 2022", "FY 2023"]
    assert chart.series[0].label == "Revenue"
    assert chart.series[0].values == [1071428, 1200000]

    sparse = exports.chart_data(Report.model_validate({"companyName": "S"}))
    assert sparse.periods == ["Previous", "Current"]
    assert [s.values for s in sparse.series] == [[0, 0], [0, 0]]


def test_credit_style():
    assert exports.credit_style("APPROVE") == "✓"
    assert exports.credit_style("DECLINE") == "✗"
    assert exports.credit_style("CONDITIONAL") == exports.credit_style("SOMETHING ELSE")


def test_render_text_handles_sparse_report():
    text = exports.render_text(Report.model_validate({"companyName": "Sparse Co"}))
    assert "=== Sparse Co" in text
    assert "Revenue: N/A" in text
    assert "Credit Decision: N/A" in text


def test_format_currency_rounds_half_away_from_zero():
    assert exports.format_currency(2.5) == "3"
    assert exports.format_currency(1234.5) == "1,235"
    assert exports.format_currency(-2.5) == "-3"


def test_text_values_render_as_given():
    assert exports.format_currency("not disclosed") == "not disclosed"
    assert exports.format_ratio("N/A") == "N/A"


def test_exports_with_text_and_null_sections():
    report = make_report(
        keyMetrics={"revenue": {"current": "N/A", "previous": 900, "change": None}},
        creditRecommendation=None,
        ratios=None,
    )
    csv = exports.report_csv(report, generated=date(2024, 1, 1))
    assert csv.endswith("Revenue,N/A,900,N/A\n")
    assert exports.chart_data(report).series[0].values == [900, 0]
    assert "Credit Decision: N/A" in exports.report_html(report)
    assert unquote(exports.mailto_link(report)).endswith("Credit Decision: N/A")

    text = exports.render_text(report)
    assert "Revenue: N/A" in text
    assert "Profit Margin: N/A%" in text
