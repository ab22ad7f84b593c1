class AnalyzerError(Exception):
    """Base class for errors surfaced to the user as a single message."""


class FileTypeError(AnalyzerError):
    pass


class ReportFormatError(AnalyzerError):
    pass


class ProxyError(AnalyzerError):
    """The /api/analyze call failed or answered with a non-2xx status."""


class UpstreamError(AnalyzerError):
    """Gemini failed, or answered without a usable candidate."""
