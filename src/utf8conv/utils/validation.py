"""Length validation for transcoder calls."""
from __future__ import annotations

from ..errors import InputTooLarge

MAX_TRANSFER_COUNT = 2**31 - 1


def ensure_transfer_count(count: int, *, limit: int = MAX_TRANSFER_COUNT) -> int:
    """Ensure ``count`` can be handed to a transcoder as a signed 32-bit length.

    Parameters
    ----------
    count:
        Number of source code units about to be transcoded.
    limit:
        Largest count the transcoder accepts.

    Returns
    -------
    int
        ``count`` unchanged.

    Raises
    ------
    ValueError
        If ``count`` is negative.
    InputTooLarge
        If ``count`` exceeds ``limit``.
    """

    if count < 0:
        raise ValueError(f"Element count must not be negative: {count}")
    if count > limit:
        raise InputTooLarge(count, limit)
    return count


__all__ = ["MAX_TRANSFER_COUNT", "ensure_transfer_count"]
