import torch

from perturbnet import DynamicNet
from perturbnet.config import HillClimbConfig
from perturbnet.optim import hill_climb


def _quadratic_score(net):
    score = 0.0
    for i in range(11):
        x = 0.1 * i
        target_y = 2.0 * (x - 0.5) ** 2
        net_y = net.process(torch.tensor([x, 1.0]))[0].item()
        score += (target_y - net_y) ** 2
    return score


def test_hill_climb_history_never_increases():
    net = DynamicNet([2, 4, 1], seed=0)
    result = hill_climb(net, _quadratic_score, HillClimbConfig(iterations=200))

    history = result["score_history"]
    assert len(history) == 200
    assert all(b <= a for a, b in zip(history, history[1:]))
    assert result["best_score"] == history[-1]
    assert result["best_score"] <= result["initial_score"]
    assert _quadratic_score(result["best"]) == result["best_score"]


def test_hill_climb_improves():
    net = DynamicNet([2, 4, 1], seed=0)
    result = hill_climb(net, _quadratic_score, HillClimbConfig(iterations=300))

    assert result["num_improvements"] > 0
    assert result["best_score"] < result["initial_score"]


def test_hill_climb_layer_variant():
    net = DynamicNet([2, 3, 3, 1], seed=1)
    config = HillClimbConfig(iterations=100, layer_variant=True)
    result = hill_climb(net, _quadratic_score, config)

    assert len(result["score_history"]) == 100
    assert result["best"].layers == (2, 3, 3, 1)


def test_hill_climb_verbose(capsys):
    net = DynamicNet([2, 2, 1], seed=0)
    config = HillClimbConfig(iterations=20, verbose=True, log_interval=10)
    hill_climb(net, _quadratic_score, config)

    out = capsys.readouterr().out
    assert "Initial score" in out
    assert "Iter 10:" in out
    assert "Iter 20:" in out
    assert "Complete" in out


def test_hill_climb_quiet_by_default(capsys):
    hill_climb(DynamicNet([2, 2, 1], seed=0), _quadratic_score, HillClimbConfig(iterations=5))

    assert capsys.readouterr().out == ""
