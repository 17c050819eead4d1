from fastapi import APIRouter

from cryptoprimer.shared import load_config

router = APIRouter(tags=["guide"])

config = load_config()

STATUS_CODES = [
    {"code": 200, "name": "OK", "category": "success", "used_for": "Successful read, update or crypto operation"},
    {"code": 201, "name": "Created", "category": "success", "used_for": "A key, key pair, author or note was created"},
    {"code": 204, "name": "No Content", "category": "success", "used_for": "A note was deleted"},
    {"code": 400, "name": "Bad Request", "category": "client error", "used_for": "Body failed validation or the library rejected an input"},
    {"code": 401, "name": "Unauthorized", "category": "client error", "used_for": "Signed envelope did not verify"},
    {"code": 403, "name": "Forbidden", "category": "client error", "used_for": "Signer may not act on this resource"},
    {"code": 404, "name": "Not Found", "category": "client error", "used_for": "Unknown note or author"},
    {"code": 405, "name": "Method Not Allowed", "category": "client error", "used_for": "Path exists but not for this method"},
    {"code": 429, "name": "Too Many Requests", "category": "client error", "used_for": "Rate limit exceeded"},
    {"code": 500, "name": "Internal Server Error", "category": "server error", "used_for": "Unexpected failure"},
]


@router.get("/health")
async def health():
    return {"status": "ok", "service": config.general.name}


@router.get("/guide/status_codes")
async def status_codes():
    """The HTTP status codes this service answers with and when."""
    return STATUS_CODES
