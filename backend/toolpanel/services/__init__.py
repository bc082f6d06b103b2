"""Conversion and compression services for the toolbox backend."""

from .compression import CompressedImage, ImageCompressionError, compress_image, compressed_name, summarize
from .conversion import ConversionResult, UnsupportedFormatError, convert_document

__all__ = [
    'CompressedImage',
    'ConversionResult',
    'ImageCompressionError',
    'UnsupportedFormatError',
    'compress_image',
    'compressed_name',
    'convert_document',
    'summarize',
]
