import logging
from typing import List, Optional, Sequence

from finanalyzer import prompts
from finanalyzer.client import ProxyClient
from finanalyzer.errors import AnalyzerError, FileTypeError
from finanalyzer.extraction import extract_text, parse_report
from finanalyzer.schemas import ChatMessage, Report
from finanalyzer.upload import UploadedFile, encode_file, validate_selection

logger = logging.getLogger(__name__)


class AnalyzerSession:
    """
    In-memory state of one analyzer page: selected files, reports, the chat
    transcript, the last error and the busy flags. Nothing outlives the
    session object.
    """

    def __init__(self, client: Optional[ProxyClient] = None):
        self.client = client or ProxyClient()
        self.files: List[UploadedFile] = []
        self.reports: List[Report] = []
        self.chat_messages: List[ChatMessage] = []
        self.error: str = ""
        self.analyzing = False
        self.chat_loading = False

    def select_files(self, files: Sequence[UploadedFile]) -> bool:
        try:
            accepted = validate_selection(files)
        except FileTypeError as e:
            self.error = str(e)
            self.files = []
            return False

        self.files = accepted
        self.error = ""
        self.reports = []
        self.chat_messages = []
        return True

    def analyze(self) -> List[Report]:
        """
        Analyze each selected file in turn. The first failure aborts the
        run; reports from a failed run are discarded.
        """
        if not self.files:
            return self.reports

        self.analyzing = True
        self.error = ""
        new_reports: List[Report] = []
        try:
            for file in self.files:
                logger.info("Analyzing %s (%d bytes)", file.name, file.size)
                response = self.client.analyze(prompts.analysis_messages(encode_file(file)))
                new_reports.append(parse_report(extract_text(response), file.name))
            self.reports = new_reports
        except AnalyzerError as e:
            logger.error("Analysis error: %s", e)
            self.error = f"Analysis failed: {e}"
        except Exception as e:
            logger.exception("Unexpected analysis error")
            self.error = f"Analysis failed: {e}"
        finally:
            self.analyzing = False
        return self.reports

    def ask(self, question: str) -> Optional[ChatMessage]:
        """Send a follow-up question; returns the assistant reply, or None if nothing was sent."""
        question = (question or "").strip()
        if not question or not self.reports or self.chat_loading:
            return None

        self.chat_messages.append(ChatMessage(role="user", content=question))
        self.chat_loading = True
        try:
            response = self.client.analyze(prompts.chat_messages(self.reports, question))
            reply = ChatMessage(role="assistant", content=extract_text(response))
        except AnalyzerError as e:
            reply = ChatMessage(role="assistant", content=f"Error: {e}")
        except Exception as e:
            logger.exception("Unexpected chat error")
            reply = ChatMessage(role="assistant", content=f"Error: {e}")
        finally:
            self.chat_loading = False

        self.chat_messages.append(reply)
        return reply
