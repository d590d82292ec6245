from collections.abc import Sequence


def compute_target(numbers: Sequence[float], factor: float) -> tuple[float, float]:
    """Return ``(average, target)`` for one round's submissions."""
    average = sum(numbers) / len(numbers)
    return average, average * factor


def pick_winner(numbers: Sequence[float], target: float) -> int:
    """Index of the number closest to ``target``.

    Only a strictly smaller distance replaces the current best, so on an
    exact tie the lowest index wins.
    """
    best_index = -1
    best_distance = float("inf")
    for index, number in enumerate(numbers):
        distance = abs(number - target)
        if distance < best_distance:
            best_index = index
            best_distance = distance
    return best_index


def find_loser(scores: Sequence[int], losing_score: int) -> int | None:
    """First index, in slot order, whose score is at or below ``losing_score``."""
    for index, score in enumerate(scores):
        if score <= losing_score:
            return index
    return None
