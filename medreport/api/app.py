import asyncio
import os
import threading
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from medreport.api.envelopes import error_status, failure_envelope, success_envelope
from medreport.config.settings import Settings
from medreport.intake.models import IncomingFile
from medreport.logging.logger import Log
from medreport.processor.exceptions import PipelineError
from medreport.processor.processor import Processor, build_processor

DISCONNECT_POLL_SECONDS = 0.5
HEALTH_FAILURE_MESSAGE = "Model service not reachable. Make sure it is running."


def to_incoming(upload: UploadFile) -> IncomingFile:
    """Describe an upload without copying it anywhere."""
    size = upload.size
    if size is None:
        upload.file.seek(0, os.SEEK_END)
        size = upload.file.tell()
        upload.file.seek(0)
    return IncomingFile(
        name=upload.filename or "upload",
        media_type=upload.content_type or "",
        size=size,
        stream=upload.file,
    )


async def watch_disconnect(request: Request, cancel: threading.Event) -> None:
    """Set ``cancel`` once the client goes away."""
    while not cancel.is_set():
        if await request.is_disconnected():
            Log.warning("Client disconnected, cancelling analysis")
            cancel.set()
            return
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


def create_app(settings: Settings, processor: Processor | None = None) -> FastAPI:
    """Build the HTTP application around a single shared Processor."""
    processor = processor or build_processor(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        processor.model_client.close()

    app = FastAPI(title="Medical Report Analyzer", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"])

    @app.get("/api/health")
    def health() -> JSONResponse:
        probe = processor.model_client.probe()
        if not probe.reachable:
            Log.error(f"Health check failed: {probe.error}")
            return JSONResponse({"ok": False, "error": HEALTH_FAILURE_MESSAGE}, status_code=503)
        return JSONResponse(
            {
                "ok": True,
                "provider": probe.provider,
                "model": probe.model,
                "details": probe.details,
            }
        )

    @app.post("/api/analyze")
    async def analyze(
        request: Request,
        files: list[UploadFile] | None = File(None),
    ) -> JSONResponse:
        uploads = files or []
        cancel = threading.Event()
        watcher = asyncio.create_task(watch_disconnect(request, cancel))
        try:
            incoming = [to_incoming(upload) for upload in uploads]
            outcome = await run_in_threadpool(processor.analyze, incoming, cancel)
        except PipelineError as exc:
            return JSONResponse(
                failure_envelope(exc, include_details=settings.debug_errors),
                status_code=error_status(exc),
            )
        finally:
            watcher.cancel()
            for upload in uploads:
                await upload.close()
        return JSONResponse(success_envelope(outcome))

    return app
