"""Text extraction from uploaded documents (PDF, DOCX, plain text)."""

import io
import mimetypes
import zipfile
from pathlib import Path
from typing import Optional

import docx
import PyPDF2
from docx.opc.exceptions import PackageNotFoundError
from PyPDF2.errors import PdfReadError

from plume_cli.errors import ExtractionError

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC = "application/msword"
TXT = "text/plain"

SUPPORTED_TYPES = (PDF, DOCX, DOC, TXT)

_EXTENSIONS = {".pdf": PDF, ".docx": DOCX, ".doc": DOC, ".txt": TXT}


def guess_mime_type(filename: str) -> Optional[str]:
    suffix = Path(filename).suffix.lower()
    if suffix in _EXTENSIONS:
        return _EXTENSIONS[suffix]
    return mimetypes.guess_type(filename)[0]


def extract_pdf(data: bytes) -> str:
    try:
        reader = PyPDF2.PdfReader(io.BytesIO(data))
        return "\n".join(page.extract_text() or "" for page in reader.pages)
    except PdfReadError as exc:
        raise ExtractionError(f"PDF illisible : {exc}") from exc


def extract_docx(data: bytes) -> str:
    try:
        document = docx.Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise ExtractionError(f"Document Word illisible : {exc}") from exc
    return "\n".join(p.text for p in document.paragraphs)


def extract_txt(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ExtractionError("Le fichier texte n'est pas encodé en UTF-8") from exc


def extract_text(data: bytes, mime_type: str) -> str:
    if mime_type == PDF:
        return extract_pdf(data)
    if mime_type == DOCX:
        return extract_docx(data)
    if mime_type == TXT:
        return extract_txt(data)
    if mime_type == DOC:
        raise ExtractionError(
            "Le format Word 97-2003 (.doc) n'est pas pris en charge, convertissez-le en .docx"
        )
    raise ExtractionError("Type de fichier non supporté")
