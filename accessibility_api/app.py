# app.py
import datetime
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from accessibility_api import config
from accessibility_api.core.auditor import run_audit
from accessibility_api.core.errors import AuditError, ErrorKind
from accessibility_api.core.limiter import AuditLimiter
from accessibility_api.core.utils import is_blank, normalize_url
from accessibility_api.models.schema import AuditReport, AuditRequest, ErrorBody, HealthStatus

# ---------- logging ----------
logging.basicConfig(level=config.LOG_LEVEL)
log = logging.getLogger("accessibility-audit")

STARTED_AT = time.monotonic()

URL_REQUIRED = "URL is required"
URL_INVALID = "URL is invalid"
AUDIT_FAILED = "Failed to run accessibility audit"
AUDIT_BUSY = "Audit capacity exceeded, try again later"

# kinds are exposed in a header so bodies stay generic
ERROR_KIND_HEADER = "X-Audit-Error-Kind"

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.LAUNCH_FAILURE: 500,
    ErrorKind.NAVIGATION_FAILURE: 500,
    ErrorKind.ANALYSIS_FAILURE: 500,
    ErrorKind.UNHANDLED: 500,
    ErrorKind.CAPACITY: 503,
    ErrorKind.TIMEOUT: 504,
}


def new_limiter() -> AuditLimiter:
    return AuditLimiter(config.MAX_CONCURRENT_AUDITS, config.AUDIT_QUEUE_TIMEOUT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.limiter = new_limiter()
    log.info("Accessibility audit API ready (max %d concurrent audits)", app.state.limiter.max_concurrent)
    yield


# ---------- app ----------
app = FastAPI(title="Accessibility Audit API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str, kind: Optional[ErrorKind] = None) -> JSONResponse:
    headers = {ERROR_KIND_HEADER: kind.value} if kind else None
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def utc_timestamp() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------- dependencies ----------
def get_limiter(request: Request) -> AuditLimiter:
    # lifespan may not have run when the app is embedded
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None:
        limiter = request.app.state.limiter = new_limiter()
    return limiter


def get_auditor():
    return run_audit


# ---------- error mapping ----------
@app.exception_handler(AuditError)
async def audit_error_handler(request: Request, exc: AuditError):
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    if exc.kind is ErrorKind.VALIDATION:
        log.info("Rejected audit request: %s", exc.detail)
        return error_response(status_code, URL_INVALID, exc.kind)
    if exc.kind is ErrorKind.CAPACITY:
        log.warning("Audit rejected: %s", exc.detail)
        return error_response(status_code, AUDIT_BUSY, exc.kind)
    log.error("Error running accessibility audit [%s]: %s", exc.kind.value, exc.detail, exc_info=exc)
    return error_response(status_code, AUDIT_FAILED, exc.kind)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    log.info("Malformed audit request: %s", errors)
    if any("url" in err.get("loc", ()) for err in errors):
        return error_response(400, URL_INVALID, ErrorKind.VALIDATION)
    return error_response(400, URL_REQUIRED, ErrorKind.VALIDATION)


# ---------- main audit endpoint ----------
@app.post(
    "/audit",
    response_model=AuditReport,
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}, 503: {"model": ErrorBody}, 504: {"model": ErrorBody}},
)
@app.post("/api/audit", response_model=AuditReport, include_in_schema=False)
async def audit_page(
    request: Optional[AuditRequest] = None,
    limiter: AuditLimiter = Depends(get_limiter),
    auditor=Depends(get_auditor),
):
    raw_url = request.url if request else None
    if is_blank(raw_url):
        return error_response(400, URL_REQUIRED, ErrorKind.VALIDATION)

    url = normalize_url(raw_url)
    log.info("Audit requested for: %s", url)

    async with limiter.slot():
        try:
            report = await auditor(url)
            return AuditReport.model_validate(report)
        except AuditError:
            raise
        except Exception as e:
            raise AuditError(ErrorKind.UNHANDLED, f"unexpected error auditing {url}: {e!r}") from e


# ---------- health endpoints ----------
@app.get("/health", response_model=HealthStatus)
async def health_check():
    return {
        "status": "UP",
        "timestamp": utc_timestamp(),
        "uptime": time.monotonic() - STARTED_AT,
    }


@app.get("/")
async def read_root():
    return {"message": "Accessibility Audit API (ready)"}


def main():
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
