"""Text normalization utilities for matching, naming and vocabulary slugs."""

import re
import unicodedata

_PASCAL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z][a-z])|(?<=[a-z])(?=[A-Z])")


def normalize_text(
    text: str | None,
    *,
    lowercase: bool = True,
    remove_accents: bool = True,
    collapse_whitespace: bool = True,
) -> str:
    """
    Normalize text for lenient comparison.

    Args:
        text: Input text to normalize
        lowercase: Convert to lowercase
        remove_accents: Remove diacritical marks (é -> e)
        collapse_whitespace: Replace runs of whitespace with a single space

    Returns:
        Normalized string suitable for comparison
    """
    if not text:
        return ""

    result = text

    if remove_accents:
        nfkd = unicodedata.normalize("NFKD", result)
        result = "".join(c for c in nfkd if not unicodedata.combining(c))

    if lowercase:
        result = result.casefold()

    if collapse_whitespace:
        result = re.sub(r"\s+", " ", result).strip()

    return result


def clean_string(value: object) -> str | None:
    """Trim a loosely-typed value; non-strings and blanks become None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def split_person_name(name: str | None) -> tuple[str | None, str | None]:
    """
    Split a display name into ``(family, given)``.

    Handles:
    - "Smith, Jane" -> ("Smith", "Jane")
    - "Jane Smith" -> ("Smith", "Jane")
    - "Smith" -> ("Smith", None)
    """
    name = clean_string(name)
    if name is None:
        return None, None

    if "," in name:
        family, given = (p.strip() for p in name.split(",", 1))
        return family or None, given or None

    parts = name.split()
    if len(parts) == 1:
        return parts[0], None
    return parts[-1], " ".join(parts[:-1])


def format_person_name(family_name: str | None, given_name: str | None) -> str:
    """Render ``Family, Given``; a single part stands alone, neither is ``Unknown``."""
    family = clean_string(family_name)
    given = clean_string(given_name)
    if family and given:
        return f"{family}, {given}"
    return family or given or "Unknown"


def pascal_to_kebab(value: str) -> str:
    """Convert ``BookChapter`` to ``book-chapter``."""
    return _PASCAL_BOUNDARY.sub("-", value.strip()).lower()


def slugify_label(label: str) -> str:
    """Convert a display label such as ``Book Chapter`` to ``book-chapter``."""
    return re.sub(r"[^a-z0-9]+", "-", normalize_text(label)).strip("-")


def label_to_pascal(label: str) -> str:
    """Convert a display label such as ``Book Chapter`` to ``BookChapter``."""
    return "".join(word[:1].upper() + word[1:] for word in label.split())
