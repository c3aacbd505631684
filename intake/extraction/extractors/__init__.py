"""Extractors 패키지"""

from intake.extraction.extractors.base import BaseExtractor
from intake.extraction.extractors.label_extractor import LabelPatternExtractor
from intake.extraction.extractors.utils import (
    contains_keyword,
    find_labeled_value,
    strip_role_suffix,
)

__all__ = [
    "BaseExtractor",
    "LabelPatternExtractor",
    "contains_keyword",
    "find_labeled_value",
    "strip_role_suffix",
]
