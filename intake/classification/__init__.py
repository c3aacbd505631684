"""Classification 패키지"""

from intake.classification.classifier import (
    Classification,
    ReasonClassifier,
    match_category,
)
from intake.classification.table import (
    LOCATION_TABLE,
    REASON_TABLE,
    ClassificationRule,
    ClassificationTable,
    build_location_table,
    build_reason_table,
)

__all__ = [
    "Classification",
    "ClassificationRule",
    "ClassificationTable",
    "LOCATION_TABLE",
    "REASON_TABLE",
    "ReasonClassifier",
    "build_location_table",
    "build_reason_table",
    "match_category",
]
