"""
Edit-distance similarity between company names and addresses
"""
from typing import List

from services.normalizer import normalize_company_name


def levenshtein_distance(a: str, b: str) -> int:
    """
    Levenshtein distance with unit cost for insertion, deletion and substitution

    The matrix has len(b) + 1 rows and len(a) + 1 columns.
    """
    matrix: List[List[int]] = [[i] + [0] * len(a) for i in range(len(b) + 1)]
    matrix[0] = list(range(len(a) + 1))

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j - 1],  # substitution
                    matrix[i][j - 1],      # insertion
                    matrix[i - 1][j],      # deletion
                )

    return matrix[len(b)][len(a)]


def similarity_percent(a: str, b: str) -> int:
    """
    Similarity of two names as a whole percentage (0-100)

    Both values go through normalize_company_name first. Halves round up.
    """
    norm_a = normalize_company_name(a)
    norm_b = normalize_company_name(b)

    # Also covers both normalizing to ""
    if norm_a == norm_b:
        return 100

    distance = levenshtein_distance(norm_a, norm_b)
    max_len = max(len(norm_a), len(norm_b))

    # round(100 * (max_len - distance) / max_len), half up
    return (200 * (max_len - distance) + max_len) // (2 * max_len)
