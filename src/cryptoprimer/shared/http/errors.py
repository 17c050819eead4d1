from contextlib import contextmanager

from fastapi import HTTPException

from cryptoprimer.core.errors import CryptoError
from cryptoprimer.shared import Logger

__all__ = ["server_error_handler"]

logger = Logger(__name__).get_logger()


@contextmanager
def server_error_handler(stacklevel=1):
    """Translate failures inside a request into HTTP errors.

    ``CryptoError`` means the caller sent something the library rejected
    and becomes a 400. ``HTTPException`` is passed through untouched and
    anything else is logged and reported as a 500.
    """
    # Go 3 levels up to escape @contextmanager methods and current function
    stack_level = 2 + stacklevel
    kw = {"stacklevel": stack_level}
    try:
        yield

    except HTTPException:
        raise

    except CryptoError as e:
        logger.warning("Rejected request: %s", e, **kw)
        raise HTTPException(status_code=400, detail=str(e)) from e

    except Exception as e:
        logger.error("Failed to process request: %s", e, **kw)
        raise HTTPException(status_code=500, detail="Internal server error") from e
