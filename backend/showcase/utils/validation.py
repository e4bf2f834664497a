import json
from flask import request
from showcase.errors import ValidationError

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}

# Signed 64-bit, the widest integer column any supported backend stores
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def request_data():
    """Form fields for multipart/urlencoded requests, otherwise the JSON object."""
    if request.form:
        return request.form

    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data, *fields):
    raise_if_missing(missing_fields(data, *fields))


# ------------------------
# Field converters
# ------------------------

def text(value, field):
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ValidationError(f"'{field}' must be a string")
    return str(value)


def required_text(value, field):
    if is_blank(value):
        raise ValidationError(f"'{field}' cannot be empty")
    return text(value, field)


def integer(value, field):
    if isinstance(value, bool):
        raise ValidationError(f"'{field}' must be an integer")
    # Whole floats (3.0) pass; fractional ones are never truncated
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"'{field}' must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"'{field}' must be an integer")

    if not INT_MIN <= number <= INT_MAX:
        raise ValidationError(f"'{field}' is out of range")
    return number


def optional_integer(value, field):
    if is_blank(value):
        return None
    return integer(value, field)


def boolean(value, field):
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in TRUE_VALUES | FALSE_VALUES:
        return value.strip().lower() in TRUE_VALUES
    raise ValidationError(f"'{field}' must be a boolean")


def icon(value, field):
    """Icons are opaque: strings are kept verbatim, anything else is serialized once."""
    if is_blank(value):
        raise ValidationError(f"'{field}' cannot be empty")
    if isinstance(value, str):
        return value
    return json.dumps(value)


def choice(*options):
    def convert(value, field):
        if value not in options:
            raise ValidationError(f"'{field}' must be one of: {', '.join(options)}")
        return value
    return convert


def missing_fields(data, *fields):
    return [field for field in fields if is_blank(data.get(field))]


def raise_if_missing(missing):
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
