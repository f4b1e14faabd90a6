"""
Logging configuration with request ID support
"""
import logging
import re
import threading
import uuid

_request_context = threading.local()

# Incoming request IDs are reused only when they look like one
REQUEST_ID_PATTERN = re.compile(r'[A-Za-z0-9-]{1,64}')


def get_request_id():
    """Request ID of the request being served on this thread, if any"""
    return getattr(_request_context, 'request_id', None)


class RequestIDFilter(logging.Filter):
    """
    Logging filter to add request ID to log records
    """
    def filter(self, record):
        request_id = getattr(record, 'request_id', None) or get_request_id()
        record.request_id = request_id or 'N/A'
        return True


class RequestIDMiddleware:
    """
    Middleware to generate and attach unique request ID to each request.
    Request ID is available in request.request_id and in all log messages.
    An incoming X-Request-ID header is reused so IDs follow a request across services,
    unless it is longer than 64 characters or has characters outside [A-Za-z0-9-].
    """
    
    def __init__(self, get_response):
        self.get_response = get_response
    
    def __call__(self, request):
        request_id = request.headers.get('X-Request-ID', '')
        if not REQUEST_ID_PATTERN.fullmatch(request_id):
            request_id = str(uuid.uuid4())[:8]  # Short 8-character ID
        request.request_id = request_id
        _request_context.request_id = request_id
        
        try:
            response = self.get_response(request)
        finally:
            # Clean up thread-local
            _request_context.request_id = None
        
        # Add to response headers for debugging
        response['X-Request-ID'] = request_id
        return response
    
    def process_exception(self, request, exception):
        """Log exceptions with request ID"""
        request_id = getattr(request, 'request_id', 'N/A')
        logger = logging.getLogger('django.request')
        logger.error(
            f"[{request_id}] Exception: {type(exception).__name__}: {str(exception)}",
            exc_info=True,
            extra={'request_id': request_id}
        )
