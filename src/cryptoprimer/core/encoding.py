from base64 import b64decode

from fastapi import HTTPException

from cryptoprimer.shared import Logger

logger = Logger(__name__).get_logger()


def validate_base64_and_decode(data: str, field_name: str, expected_min_length: int = 1) -> bytes:
    """
    Validate and decode base64 data with proper error handling and logging.
    """
    try:
        decoded = b64decode(data, validate=True)
    except ValueError as e:
        logger.error("Failed to decode base64 %s: %s", field_name, e)
        raise HTTPException(
            status_code=400,
            detail=f"Invalid base64 encoding for {field_name}"
        ) from e

    if len(decoded) < expected_min_length:
        logger.error("Decoded %s is too short: %d bytes", field_name, len(decoded))
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {field_name}: decoded data too short"
        )

    logger.debug("Successfully decoded %s: %d bytes", field_name, len(decoded))
    return decoded
