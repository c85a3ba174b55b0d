"""
transferobject Utilities Module
"""

from .logging import TransferLogger, get_logger

__all__ = [
    'TransferLogger',
    'get_logger',
]
