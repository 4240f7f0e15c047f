import re
import secrets
import unicodedata

SLUG_SUFFIX_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
SLUG_SUFFIX_LENGTH = 6


def slugify(name: str) -> str:
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", folded.lower())
    return slug.strip("-")


def generate_slug(name: str) -> str:
    """URL-safe slug with a random base36 suffix, e.g. 'chez-marcel-k3x9q1'."""
    suffix = "".join(secrets.choice(SLUG_SUFFIX_ALPHABET) for _ in range(SLUG_SUFFIX_LENGTH))
    base = slugify(name) or "restaurant"
    return f"{base}-{suffix}"
