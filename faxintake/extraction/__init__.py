from faxintake.extraction.extractor import FieldExtractor
from faxintake.extraction.factory import ExtractorFactory
from faxintake.extraction.models import ExtractedFields

__all__ = ["ExtractedFields", "ExtractorFactory", "FieldExtractor"]
