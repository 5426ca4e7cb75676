"""Reference and merchant extraction from free-text transaction notes."""

import re

# Ordered: the parenthesised form wins over the trailing pipe form
REFERENCE_PATTERNS = (
    re.compile(r"\(Ref:\s*([^)]+)\)"),
    re.compile(r"\|\s*Ref:\s*(.+)$"),
)

MERCHANT_PREFIXES = (
    "PAYMENT TO ",
    "PURCHASE AT ",
    "PURCHASE FROM ",
    "PAYMENT FOR ",
    "PAYMENT ",
    "PURCHASE ",
)

LOCATION_WORDS = frozenset(
    {
        "HA",
        "NOI",
        "HANOI",
        "SAIGON",
        "HCM",
        "HCMC",
        "DA",
        "NANG",
        "DANANG",
        "STORE",
        "BRANCH",
        "LOCATION",
    }
)

MAX_MERCHANT_WORDS = 3

_DOMAIN_SUFFIX = re.compile(r"\.(COM|VN|NET|ORG)$")
_NUMERIC = re.compile(r"^\d+$")


def extract_reference_from_note(note: str) -> str:
    """Extract an embedded reference number from a transaction note.

    Recognises ``"... (Ref: FT123)"`` and ``"... | Ref: FT123"``. The token
    keeps its case since references are compared exactly.

    Returns:
        The trimmed reference, or an empty string if none is present
    """
    if not note:
        return ""

    for pattern in REFERENCE_PATTERNS:
        match = pattern.search(note)
        if match:
            return match.group(1).strip()

    return ""


def is_location_word(word: str) -> bool:
    """Check if a word is a city, branch or store indicator."""
    return word.upper() in LOCATION_WORDS


def is_numeric(word: str) -> bool:
    """Check if a word consists only of digits."""
    return bool(_NUMERIC.match(word))


def extract_merchant_name(description: str) -> str:
    """Reduce a transaction description to its likely merchant name.

    Strips one common payment prefix and a trailing domain suffix, then keeps
    up to three leading words, stopping at the first number or location word.
    When the very first word is a number or location, it is returned on its own.
    """
    desc = (description or "").strip().upper()

    for prefix in MERCHANT_PREFIXES:
        if desc.startswith(prefix):
            desc = desc[len(prefix) :]
            break

    desc = _DOMAIN_SUFFIX.sub("", desc)

    words = desc.split()
    if not words:
        return desc

    merchant_words = []
    for word in words[:MAX_MERCHANT_WORDS]:
        if is_location_word(word) or is_numeric(word):
            break
        merchant_words.append(word)

    if not merchant_words:
        return words[0]

    return " ".join(merchant_words)
