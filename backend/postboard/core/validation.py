"""Input Validation: pure field rules composed per operation.

Invariants:
    - Rules are PURE: they return a message or None, never raise
    - Every violation for an input is collected, in field order (no fail-fast)
    - A non-empty violation list raises ValidationError (422) carrying the full list

Design Decisions:
    - email-validator for syntax only (check_deliverability=False): no DNS lookups per request
"""

from email_validator import EmailNotValidError, validate_email

from postboard.core.domain_types import MIN_TEXT_LENGTH
from postboard.core.errors import ValidationError


# ─── Field Rules ─────────────────────────────────────────────────

def is_email(value: str | None) -> bool:
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_empty(value: str | None) -> bool:
    return value is None or value == ""


def check_min_length(
    value: str | None, message: str, min_length: int = MIN_TEXT_LENGTH,
) -> str | None:
    """Non-empty + minimum length rule. Returns the message on violation."""
    if is_empty(value) or len(value) < min_length:
        return message
    return None


# ─── Operation Validators ────────────────────────────────────────

def collect_user_input_errors(email: str, password: str) -> list[dict]:
    errors = []
    if not is_email(email):
        errors.append({"message": "Email is invalid."})
    message = check_min_length(password, "Password too short.")
    if message:
        errors.append({"message": message})
    return errors


def collect_post_input_errors(title: str, content: str) -> list[dict]:
    errors = []
    for value, message in (
        (title, "Title too short."),
        (content, "Content too short."),
    ):
        violation = check_min_length(value, message)
        if violation:
            errors.append({"message": violation})
    return errors


def collect_status_errors(status: str) -> list[dict]:
    if is_empty(status):
        return [{"message": "Must enter a status."}]
    message = check_min_length(status, "Status too short.")
    return [{"message": message}] if message else []


def raise_if_invalid(errors: list[dict]) -> None:
    if errors:
        raise ValidationError(errors)
