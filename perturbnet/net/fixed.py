"""Fixed-shape networks.

The shape is bound once at class level through `fixed_net`, the Python
stand-in for compile-time dimensions: every instance of a bound class has the
same widths and layer count, and serialized files carry no shape information.

Example:
    Net = fixed_net(inputs=2, outputs=1, hidden=4)
    net = Net(seed=0)
"""

from collections.abc import Iterable
from io import TextIOBase
from typing import Annotated as An

import torch
from jaxtyping import Float
from torch import Tensor

from ..codec import read_matrix, write_matrix
from ..utils.beartype import ge
from .base import BaseNet, make_generator


class FixedNet(BaseNet):
    """Network whose widths and layer count are class constants.

    * INPUTS: Number of inputs. You should probably include a constant bias.
    * OUTPUTS: Number of outputs
    * HIDDEN: Number of nodes in each hidden layer
    * EXTRA_LAYERS: There is always one hidden layer. This number adds more.

    Do not instantiate this class directly; bind a shape with `fixed_net`.
    """

    INPUTS: int | None = None
    OUTPUTS: int | None = None
    HIDDEN: int | None = None
    EXTRA_LAYERS: int | None = None

    def __init__(self, seed: An[int, ge(0)] | None = None) -> None:
        """Create a network with zeros for all connection weights.

        Args:
            seed: Seed for the mutation generator, random if None
        """
        shape = self.shapes()
        self.generator: torch.Generator = make_generator(seed)
        self.connections: list[Float[Tensor, "out_dim in_dim"]] = [
            torch.zeros(rows, cols, dtype=torch.float32) for rows, cols in shape
        ]

    @classmethod
    def shapes(cls) -> list[tuple[int, int]]:
        """(rows, cols) of every matrix: input, hidden..., output."""
        if cls.INPUTS is None:
            raise TypeError(
                f"{cls.__name__} has no shape, create one with fixed_net()"
            )
        return (
            [(cls.HIDDEN, cls.INPUTS)]
            + [(cls.HIDDEN, cls.HIDDEN)] * cls.EXTRA_LAYERS
            + [(cls.OUTPUTS, cls.HIDDEN)]
        )

    @property
    def input_connections(self) -> Float[Tensor, "hidden inputs"]:
        return self.connections[0]

    @property
    def hidden_connections(self) -> list[Float[Tensor, "hidden hidden"]]:
        return self.connections[1:-1]

    @property
    def output_connections(self) -> Float[Tensor, "outputs hidden"]:
        return self.connections[-1]

    def write(self, file: TextIOBase) -> None:
        """Write the input, hidden and output connections in order.

        Each matrix follows `perturbnet.codec.write_matrix`; shapes are
        implicit.
        """
        for weight in self.connections:
            write_matrix(weight, file)

    @classmethod
    def read(cls, lines: Iterable[str]) -> "FixedNet":
        """Read a network written by `write` for the same bound shape.

        The result gets a fresh, randomly seeded generator.

        Note: the text carries no shape, so only row and column counts are
        checked. A file written for another bound shape whose leading
        matrices have the same counts reads without error, and any matrices
        past this class's last one are left unread in `lines`.

        Raises:
            FormatError: If the row and column counts do not match this
                class's shape
        """
        lines = iter(lines)
        connections = [read_matrix(lines, rows, cols) for rows, cols in cls.shapes()]
        result = cls()
        result.connections = connections
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(num_parameters={self.num_parameters})"


_BOUND_SHAPES: dict[tuple[int, int, int, int], type[FixedNet]] = {}


def fixed_net(
    inputs: An[int, ge(1)],
    outputs: An[int, ge(1)],
    hidden: An[int, ge(1)],
    extra_layers: An[int, ge(0)] = 0,
) -> type[FixedNet]:
    """Bind a network shape, returning the matching FixedNet subclass.

    The same arguments always return the same class, so instances of equal
    shape compare and serialize interchangeably.

    Args:
        inputs: Input width
        outputs: Output width
        hidden: Width of every hidden layer
        extra_layers: Hidden layers beyond the first

    Returns:
        FixedNet subclass with the shape bound
    """
    key = (inputs, outputs, hidden, extra_layers)
    if key not in _BOUND_SHAPES:
        name = f"FixedNet_{inputs}x{hidden}x{outputs}"
        if extra_layers:
            name += f"_plus{extra_layers}"
        _BOUND_SHAPES[key] = type(
            name,
            (FixedNet,),
            {
                "INPUTS": inputs,
                "OUTPUTS": outputs,
                "HIDDEN": hidden,
                "EXTRA_LAYERS": extra_layers,
                "__module__": __name__,
            },
        )
    return _BOUND_SHAPES[key]
