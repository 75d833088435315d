from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, UploadFile, File
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from photo_quality.config import WorkerSettings
from photo_quality.decoder import DecodeError
from photo_quality.pipeline import evaluate_image
from photo_quality.analyzers.enhanced import analyze_enhanced
from photo_quality.logging_mw import RequestLoggingMiddleware, configure_logging
from photo_quality.schemas import envelope, error_body
from photo_quality.utils import sha256_bytes

settings = WorkerSettings()
configure_logging(settings.log_level)
LOG = logging.getLogger("photo_quality.app")

app = FastAPI(title="Photo Quality Worker", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

NO_IMAGE = "No image file provided"
TOO_LARGE = "Image file too large"
PROCESSING_FAILED = "Failed to process image"

class UploadRejected(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

@app.exception_handler(UploadRejected)
async def upload_rejected_handler(request: Request, exc: UploadRejected):
    return JSONResponse(error_body(exc.message), status_code=exc.status_code)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # the upload field is the only request input; a non-file value counts as missing
    LOG.info("rejected upload: %s", [err.get("loc") for err in exc.errors()])
    return JSONResponse(error_body(NO_IMAGE), status_code=400)

@app.get("/")
def root():
    return {"service": "Photo Quality Worker", "status": "running"}

@app.get("/health")
def health():
    return {"ok": True}

async def _read_upload(image: Optional[UploadFile]) -> bytes:
    if image is None:
        raise UploadRejected(NO_IMAGE, 400)
    # read one byte past the cap so oversize uploads are detectable
    data = await image.read(settings.max_upload_bytes + 1)
    if not data:
        raise UploadRejected(NO_IMAGE, 400)
    if len(data) > settings.max_upload_bytes:
        raise UploadRejected(TOO_LARGE, 413)
    return data

@app.post("/api/image/check-quality")
@app.post("/api/photo-session/check-quality")
async def check_quality(image: Optional[UploadFile] = File(default=None)):
    data = await _read_upload(image)

    try:
        report = await run_in_threadpool(
            evaluate_image,
            data,
            thresholds=settings.thresholds,
            max_pixels=settings.max_image_pixels,
        )
    except DecodeError as e:
        LOG.warning("image decode failed sha256=%s: %s", sha256_bytes(data), e)
        raise UploadRejected(PROCESSING_FAILED, 500) from e
    except Exception as e:
        LOG.exception("image quality check failed sha256=%s", sha256_bytes(data))
        raise UploadRejected(PROCESSING_FAILED, 500) from e

    return envelope(report)

@app.post("/api/image/analyze")
async def analyze(image: Optional[UploadFile] = File(default=None)):
    data = await _read_upload(image)
    result = await run_in_threadpool(analyze_enhanced, data, max_pixels=settings.max_image_pixels)
    return envelope(result)
