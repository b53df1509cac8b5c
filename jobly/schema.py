import re
from typing import Any, Dict, List, Mapping

NEW_JOB_FIELDS = {"title", "salary", "equity", "companyHandle"}
UPDATE_JOB_FIELDS = {"title", "salary", "equity"}
SEARCH_FIELDS = {"title", "minSalary", "hasEquity"}

# Decimal string in [0, 1]: "0", "0.25", ".5", "1", "1.0"
EQUITY_PATTERN = re.compile(r"^(0|0?\.[0-9]+|1(\.0+)?)$")
INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_non_negative_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def _check_unknown(data: Mapping[str, Any], allowed: set) -> List[str]:
    return [f"Unknown field: {f}" for f in sorted(set(data) - allowed)]


def _check_job_fields(data: Mapping[str, Any]) -> List[str]:
    errors: List[str] = []

    if "title" in data and not _is_non_empty_str(data["title"]):
        errors.append("Field 'title' must be a non-empty string")

    if "salary" in data and data["salary"] is not None and not _is_non_negative_int(data["salary"]):
        errors.append("Field 'salary' must be a non-negative integer")

    if "equity" in data and data["equity"] is not None:
        equity = data["equity"]
        if not isinstance(equity, str) or not EQUITY_PATTERN.match(equity):
            errors.append("Field 'equity' must be a decimal string between 0 and 1")

    return errors


def validate_new_job(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    title and companyHandle are required; salary and equity are optional.
    """
    errors = _check_unknown(data, NEW_JOB_FIELDS)

    for f in ("title", "companyHandle"):
        if f not in data:
            errors.append(f"Missing required field: {f}")

    if "companyHandle" in data and not _is_non_empty_str(data["companyHandle"]):
        errors.append("Field 'companyHandle' must be a non-empty string")

    errors.extend(_check_job_fields(data))
    return errors


def validate_job_update(data: Dict[str, Any]) -> List[str]:
    """
    Validate a patch. Only title, salary and equity may change; id and
    companyHandle are fixed once a job exists.
    """
    errors = _check_unknown(data, UPDATE_JOB_FIELDS)
    if not data:
        errors.append("No data")
    errors.extend(_check_job_fields(data))
    return errors


def validate_job_search(data: Dict[str, Any]) -> List[str]:
    """Validate filter criteria after coerce_search_params()."""
    errors = _check_unknown(data, SEARCH_FIELDS)

    if "title" in data and not isinstance(data["title"], str):
        errors.append("Field 'title' must be a string")

    if "minSalary" in data and not _is_non_negative_int(data["minSalary"]):
        errors.append("Field 'minSalary' must be a non-negative integer")

    if "hasEquity" in data and not isinstance(data["hasEquity"], bool):
        errors.append("Field 'hasEquity' must be a boolean")

    return errors


def coerce_search_params(query: Mapping[str, str]) -> Dict[str, Any]:
    """
    Convert string query parameters into typed filter criteria.

    minSalary becomes an int when it parses as one (left as-is otherwise so
    validation reports it); hasEquity is True only for the string "true".
    """
    criteria: Dict[str, Any] = dict(query)

    min_salary = criteria.get("minSalary")
    if isinstance(min_salary, str) and INTEGER_PATTERN.match(min_salary.strip()):
        criteria["minSalary"] = int(min_salary.strip())

    if "hasEquity" in criteria:
        value = criteria["hasEquity"]
        criteria["hasEquity"] = value is True or (isinstance(value, str) and value.lower() == "true")

    return criteria
