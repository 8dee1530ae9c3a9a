"""Feed-forward networks tuned by perturbation-and-selection.

A candidate network is cloned, randomly perturbed, scored by a caller-supplied
fitness function, and kept only if it scores better. No gradients involved.

Modules:
    noise: Long-tailed noise shaping (`infinite_map`) and matrix perturbation
    codec: Plain-text matrix serialization
    net: Fixed- and dynamic-shape networks with their forward pass
    mutation: Whole-network and single-layer variant generation
    optim: Reference hill-climbing loop built on the above
    config: Configuration dataclasses
"""

from beartype import BeartypeConf
from beartype.claw import beartype_this_package

# Enable beartype runtime type checking for all modules in this package
beartype_this_package(conf=BeartypeConf(is_pep484_tower=True))

from .errors import DimensionError, FormatError  # noqa: E402
from .mutation import create_layer_variant, create_variant  # noqa: E402
from .net import BaseNet, DynamicNet, FixedNet, NetProtocol, fixed_net  # noqa: E402
from .noise import infinite_map, perturb, rand_index  # noqa: E402

__version__ = "1.0.0"

__all__ = [
    "BaseNet",
    "DimensionError",
    "DynamicNet",
    "FixedNet",
    "FormatError",
    "NetProtocol",
    "create_layer_variant",
    "create_variant",
    "fixed_net",
    "infinite_map",
    "perturb",
    "rand_index",
]
