"""Dynamic-shape networks.

Much like FixedNet, but the layer widths are a runtime list stored on each
instance, input lengths are checked at call time, and the serialized form is
self-describing (matrix count, then each matrix's row count).
"""

from collections.abc import Iterable, Sequence
from io import TextIOBase
from typing import Annotated as An

import torch
from jaxtyping import Float
from torch import Tensor

from ..codec import read_count, read_sized_matrix, write_matrix
from ..errors import FormatError
from ..utils.beartype import all_ge, ge
from .base import BaseNet, make_generator


class DynamicNet(BaseNet):
    """Network with runtime-sized layers.

    Attributes:
        layers: Neurons per layer, input width first and output width last
    """

    def __init__(
        self,
        layers: An[Sequence[int], all_ge(1)],
        seed: An[int, ge(0)] | None = None,
    ) -> None:
        """Create a network with zeros for all connection weights.

        Args:
            layers: Number of neurons in each layer, starting with the number
                of inputs and ending with the number of outputs. With fewer
                than two layers there are no weights and inputs are mapped
                directly to outputs.
            seed: Seed for the mutation generator, random if None
        """
        self.layers: tuple[int, ...] = tuple(layers)
        self.generator: torch.Generator = make_generator(seed)
        self.connections: list[Float[Tensor, "out_dim in_dim"]] = [
            torch.zeros(out_dim, in_dim, dtype=torch.float32)
            for in_dim, out_dim in zip(self.layers[:-1], self.layers[1:])
        ]

    @property
    def input_width(self) -> int | None:
        return self.layers[0] if self.layers else None

    @property
    def output_width(self) -> int | None:
        return self.layers[-1] if self.layers else None

    def write(self, file: TextIOBase) -> None:
        """Write the matrix count, then every matrix with its row count."""
        file.write(f"{len(self.connections)}\n")
        for weight in self.connections:
            write_matrix(weight, file, with_row_count=True)

    @classmethod
    def read(cls, lines: Iterable[str]) -> "DynamicNet":
        """Read a network written by `write`.

        Layer widths are recovered from the matrix shapes. The result gets a
        fresh, randomly seeded generator.

        Raises:
            FormatError: On malformed text or matrices whose shapes do not
                chain
        """
        lines = iter(lines)
        num_matrices: int = read_count(lines)
        connections: list[Float[Tensor, "out_dim in_dim"]] = [
            read_sized_matrix(lines) for _ in range(num_matrices)
        ]
        for i in range(1, num_matrices):
            if connections[i].shape[1] != connections[i - 1].shape[0]:
                raise FormatError(
                    f"Matrix {i} has {connections[i].shape[1]} columns, "
                    f"expected {connections[i - 1].shape[0]}"
                )
        if any(weight.numel() == 0 for weight in connections):
            raise FormatError("Matrices must have at least one row and column")

        layers: list[int] = []
        if connections:
            layers = [connections[0].shape[1]] + [
                weight.shape[0] for weight in connections
            ]
        result = cls(layers)
        result.connections = connections
        return result

    def __repr__(self) -> str:
        return f"DynamicNet(layers={list(self.layers)})"
