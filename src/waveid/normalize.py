"""Peak normalization to 16-bit full scale."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .constants import FULL_SCALE
from .errors import InvalidCanonicalFormError


def normalize_peak(samples: ArrayLike) -> NDArray[np.int16]:
    """Scale samples so the peak magnitude maps to 32767 and quantize to int16.

    Computes ``rint(s / max|s| * 32767)`` for every sample. Ties round half to
    even (numpy.rint); this choice is fixed because it decides the exact
    identifier. All-zero input stays all-zero.

    Args:
        samples: Float samples of any amplitude

    Returns:
        Quantized samples in [-32767, 32767]

    Raises:
        InvalidCanonicalFormError: If samples are empty or contain NaN/inf

    Example:
        >>> normalize_peak([0.25, -0.5, 0.0]).tolist()
        [16384, -32767, 0]
    """
    audio = np.asarray(samples, dtype=np.float64)
    if audio.size == 0:
        raise InvalidCanonicalFormError("length", "> 0", 0, "nothing to normalize")
    if not np.all(np.isfinite(audio)):
        raise InvalidCanonicalFormError("samples", "finite values", "NaN or infinity")

    peak = float(np.max(np.abs(audio)))
    if peak == 0:
        return np.zeros(audio.shape, dtype=np.int16)

    scaled = np.rint(audio / peak * FULL_SCALE)
    return scaled.astype(np.int16)  # type: ignore[no-any-return]
