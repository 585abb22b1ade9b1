"""String comparison helpers."""


def contains(string1: str, string2: str, min_length: int = 0) -> bool:
    """
    Check whether one string starts with the other, ignoring case.

    Args:
        string1: First string
        string2: Second string
        min_length: Both strings must be at least this long

    Returns:
        True if the strings are equal or the shorter is a prefix of the longer
    """
    string1 = string1.lower()
    string2 = string2.lower()

    if len(string1) < min_length or len(string2) < min_length:
        return False
    if string1 == string2:
        return True
    if len(string1) > len(string2):
        return string1.startswith(string2)
    return string2.startswith(string1)
