"""Noise shaping used by every mutation operator.

Uniform samples in [0, 1) are mapped through `infinite_map` to a signed,
long-tailed distribution: mostly small values, with rare large ones.
"""

import math

import torch
from jaxtyping import Float
from torch import Tensor


def infinite_map(
    u: float | Float[Tensor, "..."],
) -> float | Float[Tensor, "..."]:
    """Map a value in [0, 1) to (-inf, +inf), favouring small magnitudes.

    Values outside the open interval (0, 1) map to 0.

    Args:
        u: Scalar or tensor of uniform samples

    Returns:
        Mapped value(s), same type and shape as `u`
    """
    if isinstance(u, Tensor):
        c: Float[Tensor, "..."] = u - 0.5
        # The unselected branch may hold inf/nan at the edges; where() drops it.
        mapped: Float[Tensor, "..."] = 0.5 * c / torch.sqrt(0.25 - c * c)
        return torch.where((u <= 0) | (u >= 1), torch.zeros_like(u), mapped)

    if u <= 0 or u >= 1:
        return 0.0
    c = u - 0.5
    return 0.5 * c / math.sqrt(0.25 - c * c)


def rand_index(length: int, generator: torch.Generator | None = None) -> int:
    """Draw a uniformly random index in [0, length).

    Args:
        length: Number of candidates (must be positive)
        generator: Source of randomness, global torch generator if None

    Returns:
        Selected index
    """
    if length < 1:
        raise ValueError(f"Cannot pick an index among {length} candidates")
    sample: float = torch.rand((), generator=generator).item()
    # float32 rounding can push sample * length up to length itself.
    return min(math.floor(sample * length), length - 1)


def perturb(
    original: Float[Tensor, "rows cols"],
    intensity: float,
    generator: torch.Generator | None = None,
) -> Float[Tensor, "rows cols"]:
    """Create a random variation of a matrix.

    Each element receives `intensity * infinite_map(U)` with U uniform in
    [0, 1). The result can still differ from `original` by an arbitrary
    amount, though small changes dominate.

    Args:
        original: Matrix to vary (left untouched)
        intensity: Scale applied to the mapped noise
        generator: Source of randomness, global torch generator if None

    Returns:
        New perturbed matrix
    """
    uniform: Float[Tensor, "rows cols"] = torch.rand(
        original.shape, generator=generator, dtype=original.dtype
    )
    return original + intensity * infinite_map(uniform)
