"""Configuration dataclasses.

Defines the settings of the reference hill-climbing loop in `optim`.
"""

from dataclasses import dataclass


@dataclass
class HillClimbConfig:
    """Hill-climbing configuration.

    Args:
        iterations: Number of candidate networks to try
        intensity: Mutation intensity passed to every variant call
        layer_variant: Mutate one matrix per candidate instead of all of them
        verbose: Print progress every `log_interval` iterations
        log_interval: Iterations between progress lines
    """

    iterations: int = 1000
    intensity: float = 1.0
    layer_variant: bool = False
    verbose: bool = False
    log_interval: int = 100
