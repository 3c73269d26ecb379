"""Tests for ExampleAnalysisClient (template/reference adapter)."""

from faxintake.extraction.example_client_adapter import ExampleAnalysisClient
from faxintake.extraction.mapper import map_fields


class TestExampleAnalysisClient:
    def test_returns_single_document(self) -> None:
        documents = ExampleAnalysisClient().analyze(b"%PDF", "any")
        assert len(documents) == 1

    def test_document_maps_cleanly(self) -> None:
        document = ExampleAnalysisClient().analyze(b"%PDF", "any")[0]

        fields = map_fields(document)

        assert fields.patient_name == "PATIENT_1"
        assert fields.cpt_codes == ["97110", "97140"]
        assert fields.icd10_codes == ["M54.5"]
        assert fields.page_count == 1

    def test_ignores_input(self) -> None:
        client = ExampleAnalysisClient()
        assert client.analyze(b"a", "m1") == client.analyze(b"b", "m2")
