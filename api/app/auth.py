import logging
import secrets
from collections.abc import Mapping
from typing import Optional

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Verification-Token"


def verify_token(provided: Optional[str], secret: str) -> bool:
    if not secret:
        logger.warning("VERIFICATION_TOKEN is not set, skipping request verification")
        return True
    if provided is None:
        logger.error("Request verification failed: %s header missing", TOKEN_HEADER)
        return False
    # Constant-time exact match
    if secrets.compare_digest(provided.encode("utf-8"), secret.encode("utf-8")):
        return True
    logger.error("Request verification failed: token mismatch")
    return False


def is_authorized(headers: Mapping[str, str], secret: str) -> bool:
    """Check the verification header of an inbound request. Never raises."""
    try:
        provided = headers.get(TOKEN_HEADER)
    except Exception:
        logger.error("Request verification failed: could not read headers", exc_info=True)
        return False
    return verify_token(provided, secret)
