"""
HTTP Infrastructure
"""

from .tunnel import HTTP_EXCHANGE_ERRORS, SocketStream, send_request

__all__ = ["HTTP_EXCHANGE_ERRORS", "SocketStream", "send_request"]
