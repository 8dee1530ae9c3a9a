"""Network protocol defining the common interface for both network variants.

The protocol establishes a contract without requiring inheritance. FixedNet and
DynamicNet implement it so mutation operators and caller loops can swap
representations without touching evaluation or mutation code.
"""

from collections.abc import Iterable
from io import TextIOBase
from typing import Protocol, runtime_checkable

import torch
from jaxtyping import Float
from torch import Tensor


@runtime_checkable
class NetProtocol(Protocol):
    """Construct / mutate / evaluate / serialize contract.

    Construction is each variant's own constructor; the remaining groups are
    listed below.
    """

    # Required attributes
    connections: list[Float[Tensor, "out_dim in_dim"]]
    generator: torch.Generator

    def clone(self) -> "NetProtocol":
        """Independent copy, generator state included."""
        ...

    def create_variant(self, intensity: float) -> "NetProtocol":
        """Perturbed clone with every matrix varied."""
        ...

    def create_layer_variant(self, intensity: float) -> "NetProtocol":
        """Perturbed clone with a single matrix varied."""
        ...

    def process(
        self, inputs: Float[Tensor, " input_size"]
    ) -> Float[Tensor, " output_size"]:
        """Forward pass on one input vector."""
        ...

    def process_transparent(
        self, inputs: Float[Tensor, " input_size"]
    ) -> list[Float[Tensor, " dim"]]:
        """Forward pass returning every layer's (pre-activation) value."""
        ...

    def write(self, file: TextIOBase) -> None:
        """Serialize to a text stream."""
        ...

    @classmethod
    def read(cls, lines: Iterable[str]) -> "NetProtocol":
        """Deserialize from a line source."""
        ...
