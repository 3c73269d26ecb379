import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from faxintake.extraction.models import AnalyzedDocument, ListValue, StringValue


@pytest.fixture()
def sample_fax_bytes() -> bytes:
    """Generate a one-page PDF that looks like a prior-authorization fax."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "PRIOR AUTHORIZATION REQUEST")
    c.drawString(72, 700, "Patient: John Doe")
    c.drawString(72, 680, "CPT: 97110, 97140")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def john_doe_document() -> AnalyzedDocument:
    """Analysis result for the canonical John Doe fax."""
    return AnalyzedDocument(
        doc_type="prior-auth",
        fields={
            "PatientName": StringValue(value="John Doe"),
            "CptCodes": ListValue(
                items=(StringValue(value="97110"), StringValue(value="97140"))
            ),
        },
    )
