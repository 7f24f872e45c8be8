"""
Task Scheduler Input Validation Utilities
Client-side checks run before a task form is submitted
"""

from typing import Dict, Iterable

from constants import ClientMessages
from errors import ValidationError
from schemas.tasks import TaskFormData


# ============ Text Validation ============

def is_blank(value: str) -> bool:
    """True for None, empty or whitespace-only strings"""
    return not (value or "").strip()


# ============ Filter Validation ============

def require_choice(field: str, value: str, choices: Iterable[str]) -> str:
    """Reject a filter value that is not one of the offered choices"""
    choices = list(choices)
    if value not in choices:
        raise ValidationError(
            message=f"Invalid {field}: {value!r}",
            field=field,
            errors={field: f"Must be one of: {', '.join(choices)}"},
        )
    return value


# ============ Task Form Validation ============

def validate_task_form(form: TaskFormData) -> Dict[str, str]:
    """
    Check the required form fields.

    Returns:
        Mapping of field name to error message; empty when the form is valid
    """
    errors: Dict[str, str] = {}

    if is_blank(form.title):
        errors["title"] = ClientMessages.TITLE_REQUIRED

    if is_blank(form.category):
        errors["category"] = ClientMessages.CATEGORY_REQUIRED

    return errors


def require_valid_task_form(form: TaskFormData) -> TaskFormData:
    """Validate the form and raise ValidationError if any field is invalid"""
    errors = validate_task_form(form)
    if errors:
        first_field = next(iter(errors))
        raise ValidationError(
            message=errors[first_field],
            field=first_field,
            errors=errors,
        )
    return form
