from shared.middleware.request_id import REQUEST_ID_HEADER, request_id_middleware
from shared.middleware.error_handler import error_envelope_middleware

__all__ = ["REQUEST_ID_HEADER", "request_id_middleware", "error_envelope_middleware"]
