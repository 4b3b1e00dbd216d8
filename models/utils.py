"""Utility functions for the Hue bridge CLI.

This module contains helper functions used across the application:
- format_light_state: One-line summary of a light's state
- similarity_score: Canonical fuzzy string matching algorithm
- find_similar_strings: Find similar strings using fuzzy matching
"""

from models.light import LightResource


def format_light_state(light: LightResource) -> str:
    """Summarise a light's state, e.g. "ON, 54%, 366 mirek"."""
    parts = ["ON" if light.on else "OFF"]
    if light.on and light.brightness:
        parts.append(f"{light.brightness:.0f}%")
    if light.color_temperature is not None:
        parts.append(f"{light.color_temperature} mirek")
    if light.pending_dimming_action:
        parts.append(f"dimming {light.pending_dimming_action}")
    return ", ".join(parts)


def similarity_score(s1: str, s2: str) -> int:
    """Calculate similarity score between two strings.

    This is the canonical implementation used throughout the application
    for fuzzy matching (command typo suggestions, light name matching).

    Args:
        s1: First string to compare
        s2: Second string to compare

    Returns:
        Similarity score:
        - 100: Exact match (case-insensitive)
        - 80: Prefix match
        - 60: Substring match
        - 0-50: Character sequence match (proportional to matching characters)
        - 0: No match
    """
    s1_lower = s1.lower()
    s2_lower = s2.lower()

    if s1_lower == s2_lower:
        return 100

    if s2_lower.startswith(s1_lower) or s1_lower.startswith(s2_lower):
        return 80

    if s1_lower in s2_lower or s2_lower in s1_lower:
        return 60

    # Character sequence matching
    matches = 0
    j = 0
    for char in s1_lower:
        while j < len(s2_lower):
            if s2_lower[j] == char:
                matches += 1
                j += 1
                break
            j += 1

    if matches > 0:
        score = int((matches / max(len(s1_lower), len(s2_lower))) * 50)
        return score if score > 20 else 0

    return 0


def find_similar_strings(target: str, candidates: list[str], limit: int = 5) -> list[str]:
    """Find similar strings using simple similarity scoring.

    Args:
        target: The string to match against
        candidates: List of candidate strings to search
        limit: Maximum number of results to return

    Returns:
        List of similar strings, sorted by similarity score (most similar first)
    """
    scored = [(candidate, similarity_score(target, candidate)) for candidate in candidates]

    filtered = [(c, s) for c, s in scored if s > 0]
    sorted_matches = sorted(filtered, key=lambda x: x[1], reverse=True)

    return [c for c, s in sorted_matches[:limit]]
