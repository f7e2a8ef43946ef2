"""Edit-distance similarity used for free-text answers."""


def distance(a: str, b: str) -> int:
    """Return the Levenshtein edit distance between two strings.

    Fills a (len(b) + 1) x (len(a) + 1) table where each cell holds the
    cheapest way to turn the first j characters of ``a`` into the first i
    characters of ``b``. Every insertion, deletion and substitution costs 1.
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(b) + 1):
        matrix[i][0] = i
    for j in range(len(a) + 1):
        matrix[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,  # insertion
                    matrix[i - 1][j] + 1,  # deletion
                )

    return matrix[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """Return a similarity score in [0, 1] derived from the edit distance.

    Two empty strings are identical and score 1.0.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - distance(a, b)) / max_len
