import io

import pytest
import torch

from perturbnet import (
    BaseNet,
    DimensionError,
    FixedNet,
    FormatError,
    NetProtocol,
    fixed_net,
)


def _linear_score(net):
    """Squared error against y = -2x + 0.75 on 11 points of [0, 1]."""
    score = 0.0
    for i in range(11):
        x = 0.1 * i
        target_y = -2.0 * x + 0.75
        net_y = net.process(torch.tensor([x, 1.0]))[0].item()
        score += (target_y - net_y) ** 2
    return score


def test_fixed_net_binds_shape_once():
    assert fixed_net(2, 1, 4) is fixed_net(2, 1, 4)
    assert fixed_net(2, 1, 4) is not fixed_net(2, 1, 4, 1)
    assert issubclass(fixed_net(2, 1, 4), FixedNet)


def test_unbound_base_class():
    with pytest.raises(TypeError, match="fixed_net"):
        FixedNet()


def test_base_class_is_abstract():
    """BaseNet leaves serialization to the variants and cannot be built."""
    with pytest.raises(TypeError, match="abstract"):
        BaseNet()


def test_shapes():
    net = fixed_net(3, 2, 5, extra_layers=2)(seed=0)

    assert net.input_connections.shape == (5, 3)
    assert [w.shape for w in net.hidden_connections] == [(5, 5), (5, 5)]
    assert net.output_connections.shape == (2, 5)
    assert net.num_parameters == 15 + 50 + 10
    assert net.input_width == 3
    assert net.output_width == 2
    assert isinstance(net, NetProtocol)


def test_zero_network_outputs_zeros():
    net = fixed_net(3, 2, 4, extra_layers=1)()

    output = net.process(torch.tensor([0.3, -7.0, 1.0]))
    assert torch.equal(output, torch.zeros(2))


def test_wrong_input_length():
    net = fixed_net(2, 1, 4)(seed=0)

    with pytest.raises(DimensionError):
        net.process(torch.tensor([1.0, 2.0, 3.0]))


def test_process_and_transparent():
    net = fixed_net(2, 1, 4)(seed=0)
    net.connections[0] = torch.tensor([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]])
    net.connections[1] = torch.tensor([[1.0, 1.0, 1.0, 1.0]])

    assert net.process_slice([2.0, 1.0]) == [3.0]
    assert net.process_slice_transparent([2.0, 1.0]) == [
        [2.0, 1.0],
        [2.0, -2.0, 1.0, -1.0],
        [3.0],
    ]


def test_last_layer_is_linear():
    net = fixed_net(1, 1, 1)(seed=0)
    net.connections[0] = torch.tensor([[1.0]])
    net.connections[1] = torch.tensor([[-3.0]])

    assert net.process_slice([2.0]) == [-6.0]


def test_process_does_not_modify_network():
    net = fixed_net(2, 1, 3)(seed=0).create_variant(1.0)
    before = net.clone()

    net.process(torch.tensor([0.5, 1.0]))
    net.process_transparent(torch.tensor([0.5, 1.0]))
    assert net == before


def test_write_read_round_trip():
    Net = fixed_net(2, 1, 3, extra_layers=1)
    net = Net(seed=1).create_variant(5.0)

    result = Net.read(io.StringIO(str(net)))
    assert type(result) is Net
    for a, b in zip(result.connections, net.connections):
        assert torch.allclose(a, b, rtol=1e-6, atol=0)


def test_written_layout():
    text = str(fixed_net(1, 1, 2)(seed=0))

    assert text == "0\n0\n\n0 0\n\n"


def test_save_load(tmp_path):
    Net = fixed_net(2, 2, 3)
    net = Net(seed=4).create_variant(2.0)
    path = tmp_path / "net.txt"

    net.save(path)
    result = Net.load(path)
    for a, b in zip(result.connections, net.connections):
        assert torch.allclose(a, b, rtol=1e-6, atol=0)


def test_read_wrong_token_count():
    Net = fixed_net(2, 1, 2)
    text = "1 2\n3 4 5\n\n6 7\n\n"

    with pytest.raises(FormatError):
        Net.read(io.StringIO(text))


def test_read_other_shape():
    text = str(fixed_net(2, 1, 4)(seed=0))

    with pytest.raises(FormatError):
        fixed_net(2, 1, 3).read(io.StringIO(text))


def test_read_leaves_extra_matrices_unread():
    """Shapes are implicit: a deeper net of matching widths reads as a prefix."""
    deep = fixed_net(1, 1, 1, extra_layers=1)(seed=0)
    deep.connections = [torch.tensor([[value]]) for value in (0.5, 1.5, 2.5)]
    lines = iter(io.StringIO(str(deep)))

    shallow = fixed_net(1, 1, 1).read(lines)

    assert [weight.item() for weight in shallow.connections] == [0.5, 1.5]
    assert list(lines) == ["2.5\n", "\n"]


def test_read_truncated():
    text = str(fixed_net(2, 1, 4)(seed=0))

    with pytest.raises(FormatError):
        fixed_net(2, 1, 4).read(io.StringIO(text[: len(text) // 2]))


def test_clones_mutate_identically_until_diverging():
    net = fixed_net(2, 1, 4)(seed=3)
    copy = net.clone()
    assert copy == net

    assert net.create_variant(1.0) == copy.create_variant(1.0)

    net.create_variant(1.0)
    assert net != copy
    assert net.create_variant(1.0) != copy.create_variant(1.0)


def test_seed_determinism():
    Net = fixed_net(2, 1, 4)

    assert Net(seed=5).create_variant(1.0) == Net(seed=5).create_variant(1.0)
    assert Net(seed=5).create_variant(1.0) != Net(seed=6).create_variant(1.0)


def test_linear_target_end_to_end():
    """Keeping only improvements fits a line within 1000 mutations."""
    best = fixed_net(2, 1, 4)(seed=0)
    best_score = _linear_score(best)
    initial_score = best_score

    for _ in range(1000):
        candidate = best.create_variant(1.0)
        candidate_score = _linear_score(candidate)
        if candidate_score < best_score:
            best = candidate
            best_score = candidate_score

    assert best_score < initial_score * 0.1
