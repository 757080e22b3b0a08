"""
Fake Stack Overflow Backend — Form Validation Rules
=====================================================

What:  The rules the ask-question and answer forms apply before submission,
       enforced again on the server.
How:   Each validator returns a dict of field name → message (empty when the
       input is valid). `ensure_valid()` turns a non-empty dict into a
       ValidationError carrying every field message at once.

Rules (question form):
    title      required, at most `max_title_length` characters
    text       required; hyperlinks must be well formed
    tags       1 to `max_tags` tags, each at most `max_tag_length` characters
    username   required

Hyperlinks use the markdown form `[label](target)`. A hyperlink is valid when
its label is non-empty and its target starts with http:// or https://.
"""

import re
from typing import Dict, Iterable, List, Optional, Union

from fakeso.config import settings
from fakeso.exceptions import ValidationError

HYPERLINK_PATTERN = re.compile(r"\[([^\]]*)\]\(([^)]*)\)")

_VALID_TARGET_PREFIXES = ("http://", "https://")


def contains_hyperlink_pattern(text: str) -> bool:
    return HYPERLINK_PATTERN.search(text or "") is not None


def contains_valid_hyperlinks(text: str) -> bool:
    """True when every `[label](target)` in `text` is well formed."""
    for label, target in HYPERLINK_PATTERN.findall(text or ""):
        if not label.strip():
            return False
        if not target.strip().startswith(_VALID_TARGET_PREFIXES):
            return False
    return True


def split_tags(tags: Union[str, Iterable[str], None]) -> List[str]:
    """
    Normalize tag input to a list of non-empty names.

    Accepts the raw whitespace-separated form input or an already split list.
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        return tags.split()
    names: List[str] = []
    for tag in tags:
        names.extend(str(tag).split())
    return names


def _validate_body(text: Optional[str], empty_message: str) -> Optional[str]:
    if not text or not text.strip():
        return empty_message
    if contains_hyperlink_pattern(text) and not contains_valid_hyperlinks(text):
        return "Invalid hyperlink"
    return None


def _validate_username(username: Optional[str]) -> Optional[str]:
    if not username or not username.strip():
        return "Username cannot be empty"
    return None


def validate_question_form(
    title: Optional[str],
    text: Optional[str],
    tags: List[str],
    asked_by: Optional[str],
) -> Dict[str, str]:
    """Field errors for a new question; empty dict when everything is valid."""
    errors: Dict[str, str] = {}

    if not title or not title.strip():
        errors["title"] = "Title cannot be empty"
    elif len(title.strip()) > settings.max_title_length:
        errors["title"] = (
            f"Title cannot be more than {settings.max_title_length} characters"
        )

    text_error = _validate_body(text, "Question text cannot be empty")
    if text_error:
        errors["text"] = text_error

    if len(tags) < 1:
        errors["tags"] = "Cannot have less than 1 tag"
    elif len(tags) > settings.max_tags:
        errors["tags"] = f"Cannot have more than {settings.max_tags} tags"
    elif any(len(tag) > settings.max_tag_length for tag in tags):
        errors["tags"] = (
            f"New tag length cannot be more than {settings.max_tag_length}"
        )

    username_error = _validate_username(asked_by)
    if username_error:
        errors["asked_by"] = username_error

    return errors


def validate_answer_form(text: Optional[str], ans_by: Optional[str]) -> Dict[str, str]:
    """Field errors for a new answer; empty dict when everything is valid."""
    errors: Dict[str, str] = {}

    text_error = _validate_body(text, "Answer text cannot be empty")
    if text_error:
        errors["text"] = text_error

    username_error = _validate_username(ans_by)
    if username_error:
        errors["ans_by"] = username_error

    return errors


def ensure_valid(errors: Dict[str, str], form: str) -> None:
    """Raise ValidationError listing every field error, if there are any."""
    if errors:
        raise ValidationError(
            message=f"{form} form has invalid fields",
            fields=errors,
        )
