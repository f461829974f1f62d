from workshop_mgmt.errors import ValidationError

LIKE_ESCAPE = "\\"


def substring_pattern(term: str) -> str:
    """
    Build a LIKE pattern matching term anywhere in a value.
    Wildcards typed by the user are matched literally.
    """
    if not term:
        raise ValidationError("Search term is required.")
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
