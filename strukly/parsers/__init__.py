"""
Parsing and normalization of extraction-service output.
"""

from .extraction_normalizer import (
    NAME_CORRECTIONS,
    add_item,
    build_receipt,
    compute_total,
    correct_item_name,
    delete_item,
    edit_item,
    normalize,
    normalize_draft,
)
from .model_output import parse_model_json, split_data_url

__all__ = [
    "NAME_CORRECTIONS", "add_item", "build_receipt", "compute_total", "correct_item_name",
    "delete_item", "edit_item", "normalize", "normalize_draft",
    "parse_model_json", "split_data_url",
]
