from typing import ClassVar

from faxintake.config.settings import Settings
from faxintake.extraction.base import BaseAnalysisClient
from faxintake.extraction.document_intelligence_adapter import DocumentIntelligenceClientAdapter
from faxintake.extraction.example_client_adapter import ExampleAnalysisClient
from faxintake.extraction.extractor import FieldExtractor


class ExtractorFactory:
    """Creates the field extractor for the configured analysis provider."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("document_intelligence", "example")

    @classmethod
    def create(cls, settings: Settings) -> FieldExtractor:
        return FieldExtractor(cls._create_client(settings))

    @classmethod
    def _create_client(cls, settings: Settings) -> BaseAnalysisClient:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleAnalysisClient()
        if provider == "document_intelligence":
            endpoint = settings.document_intelligence_endpoint.strip()
            api_key = settings.document_intelligence_key.strip()
            if not endpoint:
                raise ValueError(
                    "document_intelligence_endpoint is required for "
                    "analysis_provider=document_intelligence"
                )
            if not api_key:
                raise ValueError(
                    "document_intelligence_key is required for "
                    "analysis_provider=document_intelligence"
                )
            return DocumentIntelligenceClientAdapter(endpoint=endpoint, api_key=api_key)
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
