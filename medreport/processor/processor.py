import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path

from medreport.analysis.coercer import coerce
from medreport.config.settings import Settings
from medreport.extraction.base import BaseTextExtractor
from medreport.extraction.exceptions import ExtractionError
from medreport.extraction.factory import ExtractorFactory
from medreport.intake.exceptions import IntakeValidationError
from medreport.intake.models import IncomingFile, UploadedFile
from medreport.intake.storage import TransientStorage
from medreport.intake.validator import BatchValidator
from medreport.logging.logger import Log
from medreport.model.base import BaseModelClient
from medreport.model.exceptions import (
    ModelError,
    ModelTimeoutError,
    ModelUnreachableError,
)
from medreport.model.factory import ModelClientFactory
from medreport.processor.exceptions import PipelineError, PipelineErrorKind
from medreport.processor.models import (
    AnalysisOutcome,
    ExtractedDocument,
    ExtractionOutcome,
    PipelineState,
)
from medreport.prompting.builder import build_prompt, join_documents

EXTRACTION_FAILED_MESSAGE = (
    "Could not extract text from any of the uploaded files. "
    "Please ensure files are readable and contain text."
)
MODEL_UNREACHABLE_MESSAGE = "The analysis service is not reachable. Please try again later."
MODEL_TIMEOUT_MESSAGE = "The analysis service took too long to respond. Please try again."
MODEL_BAD_RESPONSE_MESSAGE = "The analysis service returned an unexpected response."
CANCELLED_MESSAGE = "The request was cancelled."
INTERNAL_MESSAGE = "Failed to analyze files"

MODEL_DEADLINE_GRACE_SECONDS = 5.0


class Processor:
    """Orchestrates the document analysis pipeline for one batch of files.

    Pipeline: validate -> store -> extract -> build prompt -> invoke model -> coerce.
    Transient files are released on every exit path.
    """

    def __init__(
        self,
        *,
        validator: BatchValidator,
        storage: TransientStorage,
        extractor: BaseTextExtractor,
        model_client: BaseModelClient,
        max_workers: int = 4,
        model_timeout_seconds: float = 120,
        deadline_grace_seconds: float = MODEL_DEADLINE_GRACE_SECONDS,
        poll_interval_seconds: float = 0.5,
    ) -> None:
        self._validator = validator
        self._storage = storage
        self._extractor = extractor
        self._model_client = model_client
        self._max_workers = max(1, max_workers)
        self._model_deadline = model_timeout_seconds + deadline_grace_seconds
        self._poll_interval = poll_interval_seconds

    @property
    def model_client(self) -> BaseModelClient:
        return self._model_client

    def analyze(
        self,
        files: Sequence[IncomingFile],
        cancel: threading.Event | None = None,
    ) -> AnalysisOutcome:
        """Run the full pipeline for a batch.

        Raises:
            PipelineError: on validation failure, total extraction failure,
                model failure, cancellation or an unexpected error.
        """
        Log.info(f"Received {len(files)} files for analysis")
        state = PipelineState.VALIDATING
        try:
            self._validator.validate(files)
            with self._storage.session() as session:
                state = PipelineState.STORING
                uploaded = [session.store(incoming) for incoming in files]
                self._raise_if_cancelled(cancel)

                state = PipelineState.EXTRACTING
                outcomes = self._extract_all(uploaded)
                documents = [o.document for o in outcomes if o.document is not None]
                failed = {o.file_id: o.error for o in outcomes if not o.ok}
                if not documents:
                    raise PipelineError(
                        PipelineErrorKind.EXTRACTION_TOTAL_FAILURE, EXTRACTION_FAILED_MESSAGE
                    )
                self._raise_if_cancelled(cancel)

                state = PipelineState.BUILDING
                joined = join_documents(documents)
                Log.info(f"Total extracted text: {len(joined)} characters")
                prompt = build_prompt(joined)

                state = PipelineState.INVOKING
                raw = self._invoke_model(prompt, cancel)
                Log.info(f"Model response length: {len(raw)} characters")
                Log.debug(f"Model raw response:\n{raw}")

                state = PipelineState.COERCING
                result = coerce(raw)
                if result.is_fallback:
                    Log.warning("No JSON object found in model response, using fallback")

                state = PipelineState.CLEANING
        except PipelineError as exc:
            Log.error(
                f"Analysis {PipelineState.FAILED.value} while {state.value}: "
                f"{exc.kind.value}: {exc.message}"
            )
            raise
        except Exception as exc:
            error = self._to_pipeline_error(exc)
            Log.error(
                f"Analysis {PipelineState.FAILED.value} while {state.value}: "
                f"{error.kind.value}: {exc}"
            )
            raise error from exc

        processed = [doc.file_id for doc in documents]
        Log.info(
            f"Analysis {PipelineState.DONE.value}: {len(processed)} processed, "
            f"{len(failed)} failed"
        )
        return AnalysisOutcome(result=result, processed_files=processed, failed_files=failed)

    def _extract_all(self, uploaded: list[UploadedFile]) -> list[ExtractionOutcome]:
        """Extract every file concurrently; results keep upload order."""
        workers = min(self._max_workers, len(uploaded))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="extract") as pool:
            return list(pool.map(self._extract_one, uploaded))

    def _extract_one(self, uploaded: UploadedFile) -> ExtractionOutcome:
        Log.info(f"Processing: {uploaded.file_id}")
        try:
            text = self._extractor.extract(uploaded.path, uploaded.media_type)
        except ExtractionError as exc:
            Log.warning(f"Error processing {uploaded.file_id}: {exc}")
            return ExtractionOutcome(file_id=uploaded.file_id, error=str(exc))
        Log.info(f"Extracted {len(text)} chars from {uploaded.file_id}")
        return ExtractionOutcome(
            file_id=uploaded.file_id,
            document=ExtractedDocument(file_id=uploaded.file_id, text=text),
        )

    def _invoke_model(self, prompt: str, cancel: threading.Event | None) -> str:
        """Call the model on a helper thread, honouring cancellation and a hard deadline."""
        Log.info(
            f"Sending {len(prompt)} chars to {self._model_client.provider} "
            f"model {self._model_client.model}"
        )
        Log.debug(f"Analysis prompt:\n{prompt}")
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="model")
        try:
            future = executor.submit(self._model_client.generate, prompt)
            deadline = time.monotonic() + self._model_deadline
            while True:
                if cancel is not None and cancel.is_set():
                    future.cancel()
                    raise PipelineError(PipelineErrorKind.CANCELLED, CANCELLED_MESSAGE)
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    future.cancel()
                    raise ModelTimeoutError(
                        f"No model response within {self._model_deadline:.0f}s"
                    )
                try:
                    return future.result(timeout=min(self._poll_interval, remaining))
                except FutureTimeoutError:
                    if future.done():
                        raise
        finally:
            # an abandoned call finishes in the background and its reply is dropped
            executor.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _raise_if_cancelled(cancel: threading.Event | None) -> None:
        if cancel is not None and cancel.is_set():
            raise PipelineError(PipelineErrorKind.CANCELLED, CANCELLED_MESSAGE)

    @staticmethod
    def _to_pipeline_error(exc: Exception) -> PipelineError:
        if isinstance(exc, IntakeValidationError):
            return PipelineError(PipelineErrorKind.VALIDATION, str(exc))
        if isinstance(exc, ModelTimeoutError):
            return PipelineError(PipelineErrorKind.MODEL_TIMEOUT, MODEL_TIMEOUT_MESSAGE)
        if isinstance(exc, ModelUnreachableError):
            return PipelineError(PipelineErrorKind.MODEL_UNREACHABLE, MODEL_UNREACHABLE_MESSAGE)
        if isinstance(exc, ModelError):
            return PipelineError(PipelineErrorKind.MODEL_BAD_RESPONSE, MODEL_BAD_RESPONSE_MESSAGE)
        return PipelineError(PipelineErrorKind.INTERNAL, INTERNAL_MESSAGE)


def build_processor(
    settings: Settings,
    model_client: BaseModelClient | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    return Processor(
        validator=BatchValidator(max_file_bytes=settings.max_file_bytes),
        storage=TransientStorage(Path(settings.upload_dir)),
        extractor=ExtractorFactory.create(settings),
        model_client=model_client or ModelClientFactory.create(settings),
        max_workers=settings.extraction_workers,
        model_timeout_seconds=settings.model_timeout_seconds,
    )
