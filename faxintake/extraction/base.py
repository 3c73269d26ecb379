from abc import ABC, abstractmethod

from faxintake.extraction.models import AnalyzedDocument


class BaseAnalysisClient(ABC):
    """Contract for document-analysis backends."""

    @abstractmethod
    def analyze(self, content: bytes, model_id: str) -> list[AnalyzedDocument]:
        """Run the model once over a fax file.

        Args:
            content: Raw PDF or TIFF bytes.
            model_id: Identifier of the trained extraction model.

        Returns:
            Recognized documents in backend order; may be empty.

        Raises:
            Whatever the backend raises. Callers treat any exception as an
            extraction failure.
        """
