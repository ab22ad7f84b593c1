"""Terminal front end for the analyzer.

Usage:
    finanalyzer serve --port 8000
    finanalyzer analyze statements.pdf --html --csv --out reports/
    finanalyzer chat statements.pdf
"""
import argparse
import logging
import sys
import webbrowser
from typing import List, Optional

from finanalyzer import exports
from finanalyzer.client import ProxyClient
from finanalyzer.config import settings
from finanalyzer.session import AnalyzerSession
from finanalyzer.upload import load_file

logger = logging.getLogger(__name__)


def _run_analysis(args: argparse.Namespace) -> Optional[AnalyzerSession]:
    session = AnalyzerSession(ProxyClient(base_url=args.url, timeout=args.timeout))
    try:
        files = [load_file(p) for p in args.files]
    except OSError as e:
        print(f"Cannot read {e.filename}: {e.strerror}", file=sys.stderr)
        return None

    if not session.select_files(files):
        print(session.error, file=sys.stderr)
        return None

    print(f"Analyzing {len(session.files)} file(s)...")
    session.analyze()
    if session.error:
        print(session.error, file=sys.stderr)
        return None
    return session


def _export(session: AnalyzerSession, args: argparse.Namespace) -> None:
    for report in session.reports:
        print(exports.render_text(report))
        print()
        if args.html:
            path = exports.save_export(exports.report_html(report), exports.html_filename(report), args.out)
            print(f"Saved {path}")
        if not settings.PREMIUM_ENABLED:
            if args.csv or args.email:
                print("CSV and email exports need premium (set PREMIUM_ENABLED=true).")
            continue
        if args.csv:
            path = exports.save_export(exports.report_csv(report), exports.csv_filename(report), args.out)
            print(f"Saved {path}")
        if args.email:
            link = exports.mailto_link(report)
            print(link)
            if args.open_mail:
                webbrowser.open(link)


def _print_reply(session: AnalyzerSession, question: str) -> None:
    reply = session.ask(question)
    if reply is not None:
        print(f"> {question}\n{reply.content}\n")


def cmd_analyze(args: argparse.Namespace) -> int:
    session = _run_analysis(args)
    if session is None:
        return 1
    _export(session, args)
    for question in args.ask or []:
        _print_reply(session, question)
    return 0


def cmd_chat(args: argparse.Namespace) -> int:
    session = _run_analysis(args)
    if session is None:
        return 1
    for report in session.reports:
        print(exports.render_text(report))
        print()
    print("Ask questions about the analysis (Ctrl-D to quit).")
    for line in sys.stdin:
        _print_reply(session, line)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("finanalyzer.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finanalyzer", description="AI financial statement analyzer")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the /api/analyze proxy")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    def add_client_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("files", nargs="+", help="PDF financial statements")
        p.add_argument("--url", default=None, help="proxy base URL (default: PROXY_URL)")
        p.add_argument("--timeout", type=float, default=None, help="request timeout in seconds")

    analyze = sub.add_parser("analyze", help="analyze PDFs and export the reports")
    add_client_args(analyze)
    analyze.add_argument("--out", default=".", help="directory for exported files")
    analyze.add_argument("--html", action="store_true", help="save an HTML report")
    analyze.add_argument("--csv", action="store_true", help="save a CSV snippet (premium)")
    analyze.add_argument("--email", action="store_true", help="print a mailto link (premium)")
    analyze.add_argument("--open-mail", action="store_true", help="open the mailto link")
    analyze.add_argument("--ask", action="append", help="follow-up question (repeatable)")
    analyze.set_defaults(func=cmd_analyze)

    chat = sub.add_parser("chat", help="analyze PDFs, then chat about them")
    add_client_args(chat)
    chat.set_defaults(func=cmd_chat)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
