"""Rule-based parsing pipeline for natural-language workout logs."""
from .attribute_extractor import PartialSetAttributes, extract, to_sets
from .per_set import try_per_set
from .preprocessor import expand
from .segmenter import segment
from .voice_log_parser import parse, parse_segment

__all__ = [
    "PartialSetAttributes",
    "expand",
    "extract",
    "parse",
    "parse_segment",
    "segment",
    "to_sets",
    "try_per_set",
]
