"""
Helpers for using Flask-WTF forms as JSON API validators.
"""

from flask import request
from werkzeug.datastructures import MultiDict


def json_formdata() -> MultiDict:
    """
    Request payload as form data.

    JSON bodies are used when present; null values are dropped so
    Optional() fields treat them as missing. Falls back to the posted form.
    """
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return MultiDict({key: value for key, value in payload.items() if value is not None})
    return request.form


def first_form_error(form) -> str:
    """First validation message of a form, for a single-line API error."""
    for field_errors in form.errors.values():
        if field_errors:
            return field_errors[0]
    return 'Invalid request'
