def required_text(value: str | None, label: str, min_length: int = 1) -> str | None:
    """Strip surrounding whitespace and reject values that are blank (or too short) once stripped."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) < min_length:
        raise ValueError(f"{label} must be at least {min_length} characters")
    return value
