import base64
import mimetypes
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import BaseModel

from finanalyzer.errors import FileTypeError

PDF_MIME_TYPE = "application/pdf"


class UploadedFile(BaseModel):
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def load_file(path: Union[str, Path]) -> UploadedFile:
    """Read a file from disk, the way a browser file picker would hand it over."""
    path = Path(path)
    content_type, _ = mimetypes.guess_type(path.name)
    return UploadedFile(
        name=path.name,
        content_type=content_type or "application/octet-stream",
        data=path.read_bytes(),
    )


def validate_selection(files: Sequence[UploadedFile]) -> List[UploadedFile]:
    """
    Accept a selection only if every file is a PDF. A mixed selection is
    rejected as a whole rather than filtered.
    """
    pdf_files = [f for f in files if f.content_type == PDF_MIME_TYPE]
    if len(pdf_files) != len(files):
        raise FileTypeError("Only PDF files are accepted")
    return pdf_files


def encode_file(file: UploadedFile) -> str:
    return base64.b64encode(file.data).decode("ascii")
