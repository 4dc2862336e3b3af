from typing import Annotated, Any

from pydantic import BeforeValidator, Field, StringConstraints


def split_comma_separated(value: Any) -> Any:
    """Normalize ``"a, b"`` or a list of such strings into ``["a", "b"]``.

    Multipart forms send lists either as one comma-separated value or as a
    repeated field; JSON clients send a proper array. Non-string input is
    passed through for pydantic to reject.
    """
    if value is None:
        return value
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return value

    items = []
    for item in value:
        if isinstance(item, str):
            items.extend(part.strip() for part in item.split(","))
        else:
            items.append(item)
    return [item for item in items if item != ""]


def empty_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def normalize_bool_string(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

OptionalText = Annotated[str | None, BeforeValidator(empty_to_none)]

# "true"/"false" from form data, any case
FormBool = Annotated[bool, BeforeValidator(normalize_bool_string)]

CommaSeparatedList = Annotated[
    list[NonEmptyStr],
    BeforeValidator(split_comma_separated),
    Field(min_length=1),
]
