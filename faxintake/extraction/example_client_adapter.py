"""Example analysis client.

Use this module as a reference when wiring a new analysis backend.
Implement BaseAnalysisClient and register the provider in ExtractorFactory.
"""

from datetime import date
from typing import ClassVar

from faxintake.extraction.base import BaseAnalysisClient
from faxintake.extraction.models import (
    AnalyzedDocument,
    DateValue,
    FieldValue,
    IntegerValue,
    ListValue,
    StringValue,
)


class ExampleAnalysisClient(BaseAnalysisClient):
    """Returns one fixed prior-authorization document.

    No network calls. Useful for local development against the local storage
    backend, and as a template for real backends.
    """

    DEFAULT_FIELDS: ClassVar[dict[str, FieldValue]] = {
        "PatientName": StringValue(value="PATIENT_1"),
        "DateOfBirth": DateValue(value=date(1970, 1, 1)),
        "MemberId": StringValue(value="MEMBER-0001"),
        "ServiceType": StringValue(value="Physical Therapy"),
        "CptCodes": ListValue(items=(StringValue(value="97110"), StringValue(value="97140"))),
        "Icd10Codes": StringValue(value="M54.5"),
        "UrgencyLevel": StringValue(value="Standard"),
        "PageCount": IntegerValue(value=1),
    }

    def analyze(self, content: bytes, model_id: str) -> list[AnalyzedDocument]:
        _ = content, model_id
        return [AnalyzedDocument(doc_type="example", fields=dict(self.DEFAULT_FIELDS))]
