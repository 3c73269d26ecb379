import io

from azure.ai.documentintelligence import DocumentIntelligenceClient
from azure.ai.documentintelligence.models import DocumentField, DocumentFieldType
from azure.core.credentials import AzureKeyCredential

from faxintake.extraction.base import BaseAnalysisClient
from faxintake.extraction.models import (
    AnalyzedDocument,
    DateValue,
    FieldValue,
    IntegerValue,
    ListValue,
    OtherValue,
    StringValue,
)
from faxintake.logging.logger import Log


class DocumentIntelligenceClientAdapter(BaseAnalysisClient):
    """Analysis client backed by Azure AI Document Intelligence custom models."""

    def __init__(
        self,
        *,
        endpoint: str,
        api_key: str,
        client: DocumentIntelligenceClient | None = None,
    ) -> None:
        self._client = client or DocumentIntelligenceClient(
            endpoint=endpoint,
            credential=AzureKeyCredential(api_key),
        )
        Log.info(f"Document Intelligence client initialized for {endpoint}")

    def analyze(self, content: bytes, model_id: str) -> list[AnalyzedDocument]:
        Log.info(f"Starting document analysis with model {model_id}")
        poller = self._client.begin_analyze_document(
            model_id,
            io.BytesIO(content),
            content_type="application/octet-stream",
        )
        result = poller.result()
        documents = [
            AnalyzedDocument(
                doc_type=doc.doc_type,
                fields={
                    name: to_field_value(value)
                    for name, value in (doc.fields or {}).items()
                },
                confidence=doc.confidence,
            )
            for doc in result.documents or []
        ]
        Log.info(f"Document analysis completed: {len(documents)} documents found")
        return documents


def to_field_value(field: DocumentField) -> FieldValue:
    """Convert an SDK DocumentField into the domain's tagged value."""
    if field.type == DocumentFieldType.STRING and field.value_string is not None:
        return StringValue(value=field.value_string)
    if field.type == DocumentFieldType.DATE and field.value_date is not None:
        return DateValue(value=field.value_date)
    if field.type == DocumentFieldType.INTEGER and field.value_integer is not None:
        return IntegerValue(value=field.value_integer)
    if field.type == DocumentFieldType.ARRAY:
        return ListValue(items=tuple(to_field_value(item) for item in field.value_array or []))
    return OtherValue(content=field.content)
