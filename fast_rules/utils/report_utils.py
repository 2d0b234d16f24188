from __future__ import annotations

from typing import Any


def flatten_report(report: Any, loc: tuple[str, ...] = ()) -> list[dict[str, Any]]:
    """
    Flatten a nested ValidationReport into a list of error records.

    Each record mirrors pydantic's error shape:
        {"loc": ("users", "1", "email"), "msg": "...", "type": "data_type"}

    Mappings contribute their keys to `loc`, list items that are themselves
    reports (array items, wrapped composite reports) contribute their index.
    """
    errors: list[dict[str, Any]] = []

    if report is None:
        return errors

    if isinstance(report, str):
        errors.append({"loc": loc, "msg": report, "type": "data_type"})
        return errors

    if isinstance(report, dict):
        for key, value in report.items():
            errors.extend(flatten_report(value, loc + (str(key),)))
        return errors

    if isinstance(report, (list, tuple)):
        for idx, item in enumerate(report):
            if item is None:
                continue
            if isinstance(item, str):
                errors.append({"loc": loc, "msg": item, "type": "data_type"})
            else:
                errors.extend(flatten_report(item, loc + (str(idx),)))
        return errors

    errors.append({"loc": loc, "msg": str(report), "type": "data_type"})
    return errors
