"""Dense/ReLU forward pass over a sequence of weight matrices.

Every matrix but the last is followed by a ReLU. The last layer is linear so
outputs can be negative. An empty sequence maps the input to itself.
"""

import torch
from jaxtyping import Float
from torch import Tensor


def forward(
    connections: list[Float[Tensor, "out_dim in_dim"]],
    x: Float[Tensor, " input_size"],
) -> Float[Tensor, " output_size"]:
    """Evaluate the network on one input vector.

    Args:
        connections: Weight matrices, input-facing first
        x: Input vector [input_size]

    Returns:
        Output vector [output_size]
    """
    if not connections:
        return x.clone()
    h: Float[Tensor, " dim"] = x
    for weight in connections[:-1]:
        h = torch.relu(weight @ h)
    return connections[-1] @ h


def forward_transparent(
    connections: list[Float[Tensor, "out_dim in_dim"]],
    x: Float[Tensor, " input_size"],
) -> list[Float[Tensor, " dim"]]:
    """Evaluate the network, returning the value of every layer.

    Hidden layers are reported *before* ReLU so a caller can see what got
    clamped; the clamped value is still what feeds the next layer.

    Args:
        connections: Weight matrices, input-facing first
        x: Input vector [input_size]

    Returns:
        [input, hidden pre-activations..., output]
    """
    layers: list[Float[Tensor, " dim"]] = [x.clone()]
    if not connections:
        return layers
    h: Float[Tensor, " dim"] = x
    for weight in connections[:-1]:
        pre_activation: Float[Tensor, " dim"] = weight @ h
        layers.append(pre_activation)
        h = torch.relu(pre_activation)
    layers.append(connections[-1] @ h)
    return layers
