"""
Extract schedule blocks from Google Forms availability exports.
"""
from .extract import extract_block_templates, extract_from_header_fields
from .models import (
    BlockCandidate,
    BlockTemplate,
    DateCellInfo,
    DatedBlockCandidate,
    MalformedInputError,
    TimeRange,
)

__version__ = "0.3.0"

__all__ = [
    "BlockCandidate",
    "BlockTemplate",
    "DateCellInfo",
    "DatedBlockCandidate",
    "MalformedInputError",
    "TimeRange",
    "extract_block_templates",
    "extract_from_header_fields",
]
