"""Display-name and query helpers for event photos."""


def build_display_name(date: str, photographer: str, original_name: str) -> str:
    """Build the Drive name for an uploaded photo: ``{date}_{photographer}_{original}``."""
    return f"{date}_{photographer}_{original_name}"


def escape_query_value(value: str) -> str:
    """Escape a string literal for use inside a Drive ``q`` expression."""
    return value.replace("\\", "\\\\").replace("'", "\\'")
