from .path_resolver import get_value_from_path, split_path
from .report_utils import flatten_report
from .signature_utils import call_fitted, fit_arguments

__all__ = [
    "call_fitted",
    "fit_arguments",
    "flatten_report",
    "get_value_from_path",
    "split_path",
]
