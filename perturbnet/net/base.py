"""Shared implementation of the network variants.

A network is an ordered list of float32 weight matrices plus the private
generator that feeds its mutations. Subclasses decide where the shape lives
and how the matrices are framed on disk.
"""

import copy
import io
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from io import TextIOBase
from pathlib import Path

import torch
from jaxtyping import Float
from torch import Tensor

from ..errors import DimensionError
from .forward import forward, forward_transparent


def make_generator(seed: int | None = None) -> torch.Generator:
    """Generator seeded with `seed`, or non-deterministically if None."""
    generator = torch.Generator()
    if seed is None:
        generator.seed()
    else:
        generator.manual_seed(seed)
    return generator


class BaseNet(ABC):
    """Dense ReLU network tuned by perturbation-and-selection.

    Attributes:
        connections: Weight matrices, input-facing first. Matrix k has shape
            [width k+1, width k].
        generator: Private randomness source, advanced by every mutation
    """

    connections: list[Float[Tensor, "out_dim in_dim"]]
    generator: torch.Generator

    @property
    def input_width(self) -> int | None:
        """Expected input length, None if the shape is unknown."""
        if not self.connections:
            return None
        return self.connections[0].shape[1]

    @property
    def output_width(self) -> int | None:
        """Output length, None if the shape is unknown."""
        if not self.connections:
            return None
        return self.connections[-1].shape[0]

    @property
    def num_parameters(self) -> int:
        """Total number of weights across all matrices."""
        return sum(weight.numel() for weight in self.connections)

    def clone(self) -> "BaseNet":
        """Independent copy; the generator state is duplicated byte-for-byte."""
        result = copy.copy(self)
        result.connections = [weight.clone() for weight in self.connections]
        result.generator = torch.Generator()
        result.generator.set_state(self.generator.get_state())
        return result

    def create_variant(self, intensity: float) -> "BaseNet":
        """Random variant with every weight varied.

        Intensity affects the random distribution to favor low magnitude
        values, but the result can still be changed by an arbitrary amount.
        It is scaled down per matrix by that matrix's weight count.

        see also:
         * `perturbnet.mutation.create_variant`
         * `create_layer_variant`
        """
        from ..mutation import create_variant

        return create_variant(self, intensity)

    def create_layer_variant(self, intensity: float) -> "BaseNet":
        """Random variant that only changes one randomly chosen matrix.

        see also:
         * `perturbnet.mutation.create_layer_variant`
        """
        from ..mutation import create_layer_variant

        return create_layer_variant(self, intensity)

    def _check_input(
        self, inputs: Float[Tensor, " input_size"]
    ) -> Float[Tensor, " input_size"]:
        expected: int | None = self.input_width
        if expected is not None and inputs.shape[0] != expected:
            raise DimensionError(
                f"Expected {expected} inputs, got {inputs.shape[0]}"
            )
        return inputs.to(torch.float32)

    def process(
        self, inputs: Float[Tensor, " input_size"]
    ) -> Float[Tensor, " output_size"]:
        """Run one input vector through the network.

        Args:
            inputs: Input vector. One entry should be a constant for a bias.

        Returns:
            Output vector

        Raises:
            DimensionError: If the input length does not match
        """
        return forward(self.connections, self._check_input(inputs))

    def process_slice(self, inputs: Sequence[float]) -> list[float]:
        """`process` on plain Python floats."""
        return self.process(torch.tensor(inputs, dtype=torch.float32)).tolist()

    def process_transparent(
        self, inputs: Float[Tensor, " input_size"]
    ) -> list[Float[Tensor, " dim"]]:
        """Run one input vector through the network, returning every layer.

        Note: hidden values are supplied *before* ReLU to preserve
        information.

        Returns:
            [input, hidden pre-activations..., output]
        """
        return forward_transparent(self.connections, self._check_input(inputs))

    def process_slice_transparent(
        self, inputs: Sequence[float]
    ) -> list[list[float]]:
        """`process_transparent` on plain Python floats."""
        layers = self.process_transparent(torch.tensor(inputs, dtype=torch.float32))
        return [layer.tolist() for layer in layers]

    @abstractmethod
    def write(self, file: TextIOBase) -> None:
        """Serialize the network to a text stream."""

    @classmethod
    @abstractmethod
    def read(cls, lines: Iterable[str]) -> "BaseNet":
        """Deserialize a network from a line source."""

    def save(self, path: Path | str) -> None:
        """Write the network to a file (see `write`)."""
        with Path(path).open("w") as file:
            self.write(file)

    @classmethod
    def load(cls, path: Path | str) -> "BaseNet":
        """Read a network from a file (see `read`)."""
        with Path(path).open() as file:
            return cls.read(file)

    def __str__(self) -> str:
        buffer = io.StringIO()
        self.write(buffer)
        return buffer.getvalue()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return (
            len(self.connections) == len(other.connections)
            and all(
                torch.equal(a, b)
                for a, b in zip(self.connections, other.connections)
            )
            and torch.equal(self.generator.get_state(), other.generator.get_state())
        )

    __hash__ = None
