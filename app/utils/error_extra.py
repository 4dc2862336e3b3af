from typing import Any, Sequence


def format_validation_errors(errors: Sequence[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs."""
    formatted = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        formatted.append({
            "field": ".".join(location) or "form",
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


def error_response(errors: list[dict[str, str]], message: str = "Validation failed") -> dict:
    return {"message": message, "errors": errors}
