from faxintake.extraction.base import BaseAnalysisClient
from faxintake.extraction.exceptions import MissingModelIdError
from faxintake.extraction.mapper import map_fields
from faxintake.extraction.models import ExtractedFields
from faxintake.logging.logger import Log


class FieldExtractor:
    """Runs one analysis call per fax and maps the first recognized document."""

    def __init__(self, client: BaseAnalysisClient) -> None:
        self._client = client

    def extract(self, content: bytes, model_id: str) -> ExtractedFields:
        """Analyze ``content`` with ``model_id``.

        Returns an all-absent ExtractedFields when nothing is recognized.

        Raises:
            MissingModelIdError: if ``model_id`` is empty.
            Exception: anything the backend raises, unchanged.
        """
        if not model_id:
            raise MissingModelIdError("Analysis model id is not configured")

        try:
            documents = self._client.analyze(content, model_id)
        except Exception as exc:
            Log.error(f"Document analysis failed for model {model_id}: {exc}")
            raise

        if not documents:
            Log.warning("No documents found in analysis result")
            return ExtractedFields()

        fields = map_fields(documents[0])
        Log.info(f"Extracted {fields.populated_count()} fields from document")
        return fields
