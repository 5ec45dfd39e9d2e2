"""
String normalization for comparing identifiers and company names
"""
import re

IDENTIFIER_STRIP_RE = re.compile(r'[\s\-]+')

# Legal-entity suffixes, most specific first so that "(PTY) LTD" is not
# reduced to "(PTY)" by the generic "LTD" entry.
COMPANY_SUFFIXES = (
    r'\(?PTY\)?\s*LTD',
    r'\(?PTY\)?\s*LIMITED',
    r'\(?RF\)?\s*NPC',
    r'LIMITED',
    r'LTD',
    r'NPC',
    r'CC',
    r'INC',
    r'INCORPORATED',
    r'CORP',
    r'CORPORATION',
)

# Anchored at the end, whole word only ("ACC" keeps its "CC")
COMPANY_SUFFIX_RES = tuple(
    re.compile(rf'\s*(?<!\w){suffix}\s*$') for suffix in COMPANY_SUFFIXES
)

COMPANY_PUNCTUATION_RE = re.compile(r'[.,/#!$%^&*;:{}=\-_`~()]')
WHITESPACE_RE = re.compile(r'\s+')


def normalize_identifier(value: str) -> str:
    """Strip whitespace and hyphens and uppercase, e.g. '4 123-456 789' -> '4123456789'"""
    return IDENTIFIER_STRIP_RE.sub('', value).upper()


def normalize_company_name(value: str) -> str:
    """
    Normalize a company name for comparison

    - Uppercase
    - Remove legal-entity suffixes ((PTY) LTD, NPC, CC, ...)
    - Remove punctuation
    - Collapse whitespace

    Repeats until stable, so punctuation removal that exposes another suffix
    ("ACME LTD." -> "ACME LTD" -> "ACME") still yields a fixed point.

    Args:
        value: Company name as entered or extracted

    Returns:
        Normalized name, possibly empty
    """
    normalized = value.upper()
    while True:
        stripped = normalized
        for suffix_re in COMPANY_SUFFIX_RES:
            stripped = suffix_re.sub('', stripped, count=1)

        stripped = COMPANY_PUNCTUATION_RE.sub('', stripped)
        stripped = WHITESPACE_RE.sub(' ', stripped).strip()

        if stripped == normalized:
            return normalized
        normalized = stripped


def clean_company_name(name: str) -> str:
    """Collapse whitespace, trim and uppercase. Keeps the legal suffix."""
    return WHITESPACE_RE.sub(' ', name).strip().upper()
