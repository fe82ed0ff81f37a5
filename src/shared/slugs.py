"""URL slug helpers shared by collections and blog posts."""

import re
import unicodedata


def slugify(value: str) -> str:
    """Lowercase ASCII slug: accents folded, punctuation dropped, words hyphenated."""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    normalized = re.sub(r"[*+~.()'\"!:@]", "", normalized.lower())
    return re.sub(r"[^a-z0-9]+", "-", normalized).strip("-")
