"""General utility functions and helper classes."""

import re
import unicodedata


def slugify(text: str) -> str:
    """Slugify text for use in repository paths (lowercase, hyphens, alphanum only).

    Accented Latin letters are reduced to their base letter ("Café" -> "cafe")
    before any other character is replaced.
    """
    decomposed = unicodedata.normalize("NFKD", text.lower())
    slug = "".join(char for char in decomposed if not unicodedata.combining(char))
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def branch_ref(branch: str) -> str:
    """Return the short reference name ('heads/<branch>') used by the git data API."""
    return f"heads/{branch}"
