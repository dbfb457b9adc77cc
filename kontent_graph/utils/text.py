"""
Kontent Graph — Name Helpers

Turns Kontent codenames and display names into the identifiers
used by the graph store:
- pascal_case("blog_post")  -> "BlogPost"
- slugify("Café & Bar")     -> "cafe-bar"
"""

import re
import unicodedata


# -------------------------------------------------
def _words(text: str) -> list:
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", text or "")
    return [w for w in re.split(r"[^A-Za-z0-9]+", text) if w]


# -------------------------------------------------
def pascal_case(text: str) -> str:
    return "".join(w[:1].upper() + w[1:].lower() for w in _words(text))


# -------------------------------------------------
def slugify(text: str) -> str:
    text = unicodedata.normalize("NFKD", text or "")
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\s-]+", " ", text.lower())
    text = re.sub(r"[\s_-]+", "-", text.strip())
    return text.strip("-")
