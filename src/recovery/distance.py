"""String distances used by the code matchers."""


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit cost insertions, deletions and substitutions.

    Uses the full ``(m+1) x (n+1)`` dynamic-programming table. Codes are short
    (10 characters), so the O(m*n) cost per pair is negligible.

    Example:
        >>> edit_distance("PL-7A9-K2M", "PL-7A9-K2N")
        1
        >>> edit_distance("", "ABC")
        3
    """
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(m + 1):
        dp[i][0] = i
    for j in range(n + 1):
        dp[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(dp[i - 1][j], dp[i][j - 1], dp[i - 1][j - 1])

    return dp[m][n]


def hamming_distance(a: str, b: str) -> int:
    """Number of positions at which two equal-length strings differ.

    Raises:
        ValueError: If the strings have different lengths.
    """
    if len(a) != len(b):
        raise ValueError(f"Expected equal lengths, got {len(a)} and {len(b)}")
    return sum(1 for x, y in zip(a, b) if x != y)
