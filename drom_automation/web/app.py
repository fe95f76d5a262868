"""
HTTP API for drom.ru automation.
"""

import traceback
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from .. import SERVICE_NAME, __version__
from ..config import load_config
from ..logging_config import setup_logging
from ..models import Credentials, SendMessageRequest
from ..orchestration.domain_boundary import DomainBoundaryChecker
from ..scrapers.browser_session import BrowserSession
from ..scrapers.drom_client import DromClient

CREDENTIALS_REQUIRED = "login и password обязательны"
ALL_FIELDS_REQUIRED = "Все поля обязательны"
INVALID_CHAT_URL = "chatUrl должен указывать на drom.ru"
INVALID_JSON = "Некорректный JSON"

REQUIRED_FIELDS_ERRORS = {
    "/drom/get-messages": CREDENTIALS_REQUIRED,
    "/drom/send-message": ALL_FIELDS_REQUIRED,
}

app = FastAPI(
    title="Drom Automation",
    description="Stealth browser automation for drom.ru messages",
    version=__version__
)

config = load_config()
chat_boundary = DomainBoundaryChecker(config['drom'].get('allowed_domain', 'drom.ru'))

browser_session: Optional[BrowserSession] = None
drom_client: Optional[DromClient] = None


def get_drom_client() -> DromClient:
    """Get the shared Drom client."""
    if drom_client is None:
        raise RuntimeError("Drom client not initialized")
    return drom_client


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2025-01-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@app.on_event("startup")
async def startup():
    """Configure logging and create the (lazily launched) browser session."""
    global browser_session, drom_client

    setup_logging(config)
    browser_session = BrowserSession(config)
    drom_client = DromClient(config, browser_session)
    port = config['server']['port']
    logger.info(f"Drom automation service started on port {port}")
    logger.info(f"Health check: http://localhost:{port}/health")


@app.on_event("shutdown")
async def shutdown():
    """Close the browser."""
    global browser_session, drom_client
    if browser_session:
        await browser_session.close()
        logger.info("Browser session closed")
    browser_session = None
    drom_client = None


def _has_content(request: Request) -> bool:
    try:
        return int(request.headers.get('content-length', '0')) > 0
    except ValueError:
        return False


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer body validation problems with 400 and the route's message."""
    for error in exc.errors():
        loc = tuple(error.get('loc', ()))
        if error.get('type') == 'json_invalid' or (loc == ('body',) and error.get('type') != 'missing'):
            return JSONResponse(status_code=400, content={"error": INVALID_JSON})
        # A literal null body is reported as missing; only an empty body really is
        if loc == ('body',) and _has_content(request):
            return JSONResponse(status_code=400, content={"error": INVALID_JSON})

    message = REQUIRED_FIELDS_ERRORS.get(request.url.path, INVALID_JSON)
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "timestamp": utc_timestamp()
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": __version__,
        "status": "running"
    }


@app.post("/drom/get-messages")
async def get_messages(body: Credentials, client: DromClient = Depends(get_drom_client)):
    """Log in and return the chat elements found on the messages page."""
    if not body.is_complete():
        return JSONResponse(status_code=400, content={"error": CREDENTIALS_REQUIRED})

    try:
        return await client.get_messages(body.login, body.password)
    except Exception as e:
        logger.error(f"Fetching messages failed: {e}")
        content = {"success": False, "error": str(e)}
        if config['api'].get('include_stack', True):
            content["stack"] = traceback.format_exc()
        return JSONResponse(status_code=500, content=content)


@app.post("/drom/send-message")
async def send_message(body: SendMessageRequest, client: DromClient = Depends(get_drom_client)):
    """Log in, open a chat and send a message."""
    if not body.is_complete():
        return JSONResponse(status_code=400, content={"error": ALL_FIELDS_REQUIRED})

    if not chat_boundary.is_within_boundary(body.chat_url):
        return JSONResponse(status_code=400, content={"error": INVALID_CHAT_URL})

    try:
        return await client.send_message(body.login, body.password, body.chat_url, body.text)
    except Exception as e:
        logger.error(f"Sending message failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
