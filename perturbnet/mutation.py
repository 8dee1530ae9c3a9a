"""Mutation operators shared by every network variant.

Both operators return a new network and leave the source's weights untouched.
The noise is drawn from the *source* network's generator, so repeated calls on
the same source never repeat noise, while a clone taken before mutating
replays the exact same sequence.

Scaling:
--------
Each perturbed matrix uses `intensity / (rows * cols + 1)` as its effective
intensity. The aggregate change per matrix is then roughly independent of its
size, and whole-network and single-layer mutation scale the same way.
"""

import torch
from jaxtyping import Float
from torch import Tensor

from .net.protocol import NetProtocol
from .noise import perturb, rand_index


def matrix_intensity(matrix: Float[Tensor, "rows cols"], intensity: float) -> float:
    """Effective intensity for one matrix (the +1 guards empty matrices)."""
    return intensity / (matrix.numel() + 1)


def layer_candidates(num_connections: int) -> list[int]:
    """Connection indices in layer-variant selection order.

    Interior matrices first, then the input-facing one, then the
    output-facing one.
    """
    if num_connections == 0:
        return []
    if num_connections == 1:
        return [0]
    return list(range(1, num_connections - 1)) + [0, num_connections - 1]


def create_variant(network: NetProtocol, intensity: float) -> NetProtocol:
    """Create a random variant of a network with every weight varied.

    Args:
        network: Source network, its generator advances
        intensity: Scale for the added randomness

    Returns:
        New perturbed network
    """
    result: NetProtocol = network.clone()
    generator: torch.Generator = network.generator
    result.connections = [
        perturb(weight, matrix_intensity(weight, intensity), generator)
        for weight in network.connections
    ]
    return result


def create_layer_variant(network: NetProtocol, intensity: float) -> NetProtocol:
    """Create a random variant of a network that changes a single matrix.

    The matrix is picked uniformly among the interior, input-facing and
    output-facing matrices. All other matrices stay bit-identical.

    Args:
        network: Source network, its generator advances
        intensity: Scale for the added randomness

    Returns:
        New perturbed network
    """
    result: NetProtocol = network.clone()
    candidates: list[int] = layer_candidates(len(network.connections))
    if not candidates:
        return result
    generator: torch.Generator = network.generator
    index: int = candidates[rand_index(len(candidates), generator)]
    weight: Float[Tensor, "rows cols"] = network.connections[index]
    result.connections[index] = perturb(
        weight, matrix_intensity(weight, intensity), generator
    )
    return result
