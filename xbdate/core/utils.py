"""Общие вспомогательные функции."""

from collections.abc import Sized
from typing import Optional


def is_empty(sequence: Optional[Sized]) -> bool:
    """True, если последовательность None или не содержит элементов."""
    return sequence is None or len(sequence) == 0
