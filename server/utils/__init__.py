"""
Utilities module
"""

from .logger import get_logger
from .errors import error_response, ErrorCode

__all__ = ['get_logger', 'error_response', 'ErrorCode']
