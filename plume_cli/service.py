"""
Detection service: the boundary around the engine.

  validate ──► extract (files only) ──► AnalysisEngine.analyze ──► store.save

Validation and extraction failures surface as ValidationError /
ExtractionError with a message meant for the user. The engine result is
final once computed: a storage failure is logged and the caller still gets
the result, just without an id.
"""

import dataclasses
from typing import Optional, Union

from plume_cli.config import Settings, get_settings
from plume_cli.engine import AnalysisEngine, parse_analysis_type
from plume_cli.errors import ExtractionError, StorageError, ValidationError
from plume_cli.extraction import SUPPORTED_TYPES, extract_text
from plume_cli.log import get_logger
from plume_cli.models import AnalysisResult, AnalysisType, FileAnalysis, UploadedFile
from plume_cli.storage import DetectionStore

logger = get_logger(__name__)

PROCESSING_FAILURE = "Erreur lors du traitement de l'analyse"


class DetectionService:
    def __init__(
        self,
        engine: Optional[AnalysisEngine] = None,
        store: Optional[DetectionStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.engine = engine or AnalysisEngine()
        self.store = store
        self.settings = settings or get_settings()

    # ─── Validation ─────────────────────────────────────────────────────────

    def validate_text(self, text) -> str:
        if not isinstance(text, str) or not text:
            raise ValidationError("Le texte est requis et doit être une chaîne de caractères")
        if len(text.strip()) < self.settings.min_text_length:
            raise ValidationError(
                f"Le texte doit contenir au moins {self.settings.min_text_length} caractères"
            )
        if len(text) > self.settings.max_text_length:
            raise ValidationError(
                f"Le texte ne peut pas dépasser {self.settings.max_text_length} caractères"
            )
        return text

    def validate_file(self, filename: str, size: int, mime_type: Optional[str]) -> str:
        if not filename:
            raise ValidationError("Aucun fichier fourni")
        if size > self.settings.max_file_size:
            limit_mb = self.settings.max_file_size // (1024 * 1024)
            raise ValidationError(f"Le fichier ne peut pas dépasser {limit_mb}MB")
        if mime_type not in SUPPORTED_TYPES:
            raise ValidationError("Type de fichier non supporté. Utilisez PDF, DOCX, DOC ou TXT.")
        return mime_type

    # ─── Analyses ───────────────────────────────────────────────────────────

    def analyze_text(self, text: str, analysis_type: Union[str, AnalysisType] = "quick") -> AnalysisResult:
        text = self.validate_text(text)
        analysis_type = parse_analysis_type(analysis_type)
        logger.info("text_analysis_requested", analysis_type=analysis_type.value, characters=len(text))

        result = self.engine.analyze(text, analysis_type)
        return self._persist(result)

    def analyze_file(
        self,
        filename: str,
        data: bytes,
        mime_type: Optional[str],
        analysis_type: Union[str, AnalysisType] = "quick",
    ) -> FileAnalysis:
        mime_type = self.validate_file(filename, len(data), mime_type)
        analysis_type = parse_analysis_type(analysis_type)
        logger.info("file_analysis_requested", filename=filename, mime_type=mime_type,
                    size=len(data), analysis_type=analysis_type.value)

        text = extract_text(data, mime_type)
        if len(text.strip()) < self.settings.min_text_length:
            raise ExtractionError("Impossible d'extraire le texte du fichier")
        if len(text) > self.settings.max_text_length:
            raise ValidationError(
                f"Le texte extrait dépasse {self.settings.max_text_length} caractères"
            )

        uploaded = UploadedFile(filename=filename, mime_type=mime_type,
                                size=len(data), extracted_text=text)
        result = self.engine.analyze(text, analysis_type)
        return FileAnalysis(result=self._persist(result, uploaded), file=uploaded)

    def _persist(self, result: AnalysisResult, uploaded: Optional[UploadedFile] = None) -> AnalysisResult:
        if self.store is None:
            return result
        try:
            detection_id = self.store.save(result, uploaded)
        except StorageError as exc:
            logger.error("detection_persist_failed", error=str(exc))
            return result
        return dataclasses.replace(result, id=detection_id)
