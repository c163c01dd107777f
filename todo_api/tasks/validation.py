"""
Todo API - Task Validation

Required-field and length checks run before a task is persisted, both for
new tasks and for the merged result of an update.
"""

from typing import Optional

from todo_api.errors import ValidationError

TITLE_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 5000


def validate_task_fields(
    title: Optional[str],
    description: Optional[str] = None,
    completed: Optional[bool] = False,
) -> None:
    """Raise ValidationError listing every invalid field."""
    errors = []

    if title is None or not title.strip():
        errors.append({"field": "title", "message": "Title is required"})
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append({
            "field": "title",
            "message": f"Title must be at most {TITLE_MAX_LENGTH} characters",
        })

    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append({
            "field": "description",
            "message": f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
        })

    if completed is None:
        errors.append({"field": "completed", "message": "Completed must be true or false"})

    if errors:
        raise ValidationError(errors)
