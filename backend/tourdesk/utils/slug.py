import re

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def generate_slug(text: str | None) -> str:
    """
    Lowercase, collapse every run of non [a-z0-9] characters into a dash,
    trim leading/trailing dashes.

    >>> generate_slug("Backwater Cruise!")
    'backwater-cruise'
    """
    return _NON_SLUG_CHARS.sub("-", (text or "").lower()).strip("-")
