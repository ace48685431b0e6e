# tests/test_service.py
import pytest

from plume_cli.config import Settings
from plume_cli.errors import ExtractionError, StorageError, ValidationError
from plume_cli.extraction import DOC, TXT
from plume_cli.service import DetectionService
from plume_cli.storage import DetectionStore


class FailingStore(DetectionStore):
    def save(self, result, uploaded=None):
        raise StorageError("disk full")


class TestValidation:
    @pytest.mark.parametrize("text", [None, "", 42])
    def test_text_required(self, service, text):
        with pytest.raises(ValidationError, match="Le texte est requis"):
            service.analyze_text(text)

    def test_too_short_after_trim(self, service):
        with pytest.raises(ValidationError, match="au moins 10 caractères"):
            service.analyze_text("     court     ")

    def test_minimum_length_accepted(self, service):
        assert service.analyze_text("abcdefghij").ai_probability >= 0.0

    def test_too_long(self, service):
        with pytest.raises(ValidationError, match="ne peut pas dépasser 50000 caractères"):
            service.analyze_text("a" * 50_001)

    def test_limits_come_from_settings(self, store):
        service = DetectionService(store=store, settings=Settings(min_text_length=3))
        assert service.analyze_text("abcd").id is not None

    def test_invalid_type(self, service, ai_text):
        with pytest.raises(ValidationError, match="Type d'analyse invalide"):
            service.analyze_text(ai_text, "slow")


class TestTextAnalysis:
    def test_saved_result_has_id(self, service, ai_text):
        result = service.analyze_text(ai_text)
        assert result.id is not None

    def test_stored_result_round_trips(self, service, store, ai_text):
        result = service.analyze_text(ai_text, "advanced")
        assert store.get_detection(result.id).to_dict() == result.to_dict()

    def test_history_lists_analysis(self, service, store, ai_text):
        result = service.analyze_text(ai_text)
        rows = store.list_detections()
        assert [r["id"] for r in rows] == [result.id]
        assert rows[0]["characters"] == len(ai_text)
        assert rows[0]["fileName"] is None

    def test_without_store(self, ai_text):
        result = DetectionService(settings=Settings()).analyze_text(ai_text)
        assert result.id is None

    def test_storage_failure_keeps_result(self, tmp_path, ai_text):
        service = DetectionService(store=FailingStore(tmp_path / "x.db"), settings=Settings())
        result = service.analyze_text(ai_text)
        assert result.id is None
        assert len(result.indicators) == 8


class TestFileAnalysis:
    def test_text_file(self, service, store, ai_text):
        analysis = service.analyze_file("essai.txt", ai_text.encode("utf-8"), TXT)
        assert analysis.result.original_text == ai_text
        assert analysis.result.id is not None
        body = analysis.to_dict()
        assert body["fileName"] == "essai.txt"
        assert body["extractedTextLength"] == len(ai_text)
        assert store.list_detections()[0]["fileName"] == "essai.txt"

    def test_file_and_text_paths_agree(self, service, ai_text):
        from_file = service.analyze_file("essai.txt", ai_text.encode("utf-8"), TXT, "advanced")
        from_text = service.analyze_text(ai_text, "advanced")
        assert from_file.result.ai_probability == from_text.ai_probability
        assert from_file.result.indicators == from_text.indicators
        assert from_file.result.sections == from_text.sections

    def test_unsupported_type(self, service):
        with pytest.raises(ValidationError, match="Type de fichier non supporté"):
            service.analyze_file("image.png", b"\x89PNG", "image/png")

    def test_file_too_large(self, service):
        with pytest.raises(ValidationError, match="10MB"):
            service.analyze_file("big.txt", b"a" * (10 * 1024 * 1024 + 1), TXT)

    def test_missing_filename(self, service):
        with pytest.raises(ValidationError, match="Aucun fichier"):
            service.analyze_file("", b"abc", TXT)

    def test_legacy_doc_rejected(self, service):
        with pytest.raises(ExtractionError, match=r"\.doc"):
            service.analyze_file("vieux.doc", b"\xd0\xcf\x11\xe0", DOC)

    def test_blank_text_file(self, service):
        with pytest.raises(ExtractionError, match="Impossible d'extraire le texte du fichier"):
            service.analyze_file("vide.txt", b"   \n  ", TXT)


class TestUnavailableStorage:
    @pytest.fixture
    def blocked_store(self, tmp_path):
        """Base de données placée sous un fichier ordinaire : impossible à créer."""
        blocker = tmp_path / "blocker"
        blocker.write_text("pas un dossier", encoding="utf-8")
        return DetectionStore(blocker / "plume.db")

    def test_init_tables_raises_storage_error(self, blocked_store):
        with pytest.raises(StorageError):
            blocked_store.init_tables()

    def test_reads_raise_storage_error(self, blocked_store):
        with pytest.raises(StorageError):
            blocked_store.list_detections()
        with pytest.raises(StorageError):
            blocked_store.get_detection("abc")

    def test_analysis_survives_unwritable_path(self, blocked_store, ai_text):
        result = DetectionService(store=blocked_store, settings=Settings()).analyze_text(ai_text)
        assert result.id is None
        assert result.original_text == ai_text
        assert len(result.indicators) == 8
