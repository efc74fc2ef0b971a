from medreport.config.settings import Settings
from medreport.extraction.base import BaseTextExtractor
from medreport.extraction.dispatcher import DispatchingExtractor
from medreport.extraction.pdfplumber_adapter import PdfPlumberAdapter
from medreport.extraction.pymupdf_adapter import PyMuPdfAdapter
from medreport.extraction.tesseract_adapter import TesseractOcrAdapter


class ExtractorFactory:
    """Creates the extraction strategies based on settings."""

    PDF_ADAPTERS: dict[str, type[PdfPlumberAdapter] | type[PyMuPdfAdapter]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> DispatchingExtractor:
        return DispatchingExtractor(
            pdf=cls.create_pdf_extractor(settings),
            image=TesseractOcrAdapter(
                language=settings.ocr_language,
                min_text_length=settings.min_text_length,
            ),
        )

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls(min_text_length=settings.min_text_length)
