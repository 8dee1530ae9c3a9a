"""Reference selection loop.

Not part of the network core: population and replacement policies belong to
the caller. This is the simplest such policy (a (1+1) hill climber), written
only against the public network operations.
"""

import time
from typing import Callable

from .config import HillClimbConfig
from .net.protocol import NetProtocol


def hill_climb(
    net: NetProtocol,
    score_fn: Callable[[NetProtocol], float],
    config: HillClimbConfig | None = None,
) -> dict:
    """Repeatedly mutate the best network, keeping strict improvements.

    Args:
        net: Starting network; its generator drives every mutation
        score_fn: Returns a score for a network (lower is better)
        config: Loop settings, defaults to HillClimbConfig()

    Returns:
        Dict with best, best_score, initial_score, score_history and
        num_improvements. score_history holds the best score after each
        iteration and never increases.
    """
    config = config or HillClimbConfig()
    best: NetProtocol = net
    best_score: float = score_fn(best)
    initial_score: float = best_score
    score_history: list[float] = []
    num_improvements: int = 0
    start_time = time.time()

    if config.verbose:
        print(
            f"  Hill climbing for {config.iterations} iterations "
            f"(intensity={config.intensity})..."
        )
        print(f"  Initial score: {initial_score:.4f}")

    for iteration in range(config.iterations):
        if config.layer_variant:
            candidate = best.create_layer_variant(config.intensity)
        else:
            candidate = best.create_variant(config.intensity)
        score = score_fn(candidate)
        if score < best_score:
            best = candidate
            best_score = score
            num_improvements += 1
        score_history.append(best_score)

        if config.verbose and (iteration + 1) % config.log_interval == 0:
            print(
                f"  Iter {iteration + 1}: Best={best_score:.4f}, "
                f"Improvements={num_improvements}"
            )

    if config.verbose:
        total_time = time.time() - start_time
        print(
            f"  Complete: {config.iterations} iterations in {total_time:.1f}s, "
            f"Best={best_score:.4f}"
        )

    return {
        "best": best,
        "best_score": best_score,
        "initial_score": initial_score,
        "score_history": score_history,
        "num_improvements": num_improvements,
    }
