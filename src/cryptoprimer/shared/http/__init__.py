from .errors import server_error_handler

__all__ = ["server_error_handler"]
