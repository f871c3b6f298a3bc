"""
Tests for the modulated network types: UESMANN, output blending and
h-as-input.
"""

import numpy as np
import pytest

from uesmann import (
    BPNet, UESNet, OutputBlendingNet, HInputNet, ExampleSet, SGDParams,
    NetType, UnsupportedOperationError
)
from uesmann.networks import sigmoid
from gradcheck import reference_gradients


def random_set(count, n_inputs, n_outputs, h=None, seed=0):
    rng = np.random.default_rng(seed)
    return ExampleSet.from_arrays(
        rng.uniform(0, 1, (count, n_inputs)),
        rng.uniform(0, 1, (count, n_outputs)),
        h=h, n_h_levels=2
    )


class TestUESNet:
    """Tests for the UESMANN network."""

    def test_type(self):
        """Test type tag and modulator storage."""
        net = UESNet([2, 2, 1])
        assert net.net_type is NetType.UESMANN
        net.set_h(0.3)
        assert net.get_h() == 0.3

    def test_forward_is_modulated(self):
        """Test that weighted sums, not biases, are scaled by h+1."""
        net = UESNet([3, 4, 2])
        net.init_weights(1.0, np.random.default_rng(0))
        x = np.array([0.2, 0.9, 0.4])

        h = 0.6
        net.set_h(h)
        out = net.run(x).copy()

        hidden = sigmoid(net._w(1) @ x * (h + 1) + net.biases[1])
        expected = sigmoid(net._w(2) @ hidden * (h + 1) + net.biases[2])
        assert np.allclose(out, expected, rtol=1e-12)

    def test_h_zero_forward_matches_plain(self):
        """Test that at h=0 the outputs are exactly those of a plain network."""
        ues = UESNet([3, 5, 2])
        ues.init_weights(-1, np.random.default_rng(1))
        plain = BPNet([3, 5, 2])
        plain.load(ues.save())

        ues.set_h(0.0)
        for x in np.random.default_rng(2).uniform(-1, 1, (10, 3)):
            assert np.array_equal(ues.run(x), plain.run(x))

    def test_h_zero_training_matches_plain(self):
        """Test that at h=0 a training step is exactly a plain step."""
        ues = UESNet([3, 5, 2])
        ues.init_weights(-1, np.random.default_rng(3))
        plain = BPNet([3, 5, 2])
        plain.load(ues.save())

        examples = random_set(6, 3, 2)
        for start in range(0, 6, 2):
            e_ues = ues.train_batch(examples, start, 2, 0.5)
            e_plain = plain.train_batch(examples, start, 2, 0.5)
            assert e_ues == e_plain
        assert np.array_equal(ues.save(), plain.save())

    def test_h_zero_sgd_matches_plain(self):
        """Test that whole SGD runs agree at h=0 given the same seed."""
        params = SGDParams(eta=0.5, iterations=200).set_seed(9)
        ues = UESNet([3, 3, 2])
        plain = BPNet([3, 3, 2])

        mse_ues = ues.train_sgd(random_set(20, 3, 2, seed=4), params)
        mse_plain = plain.train_sgd(random_set(20, 3, 2, seed=4), params)

        assert mse_ues == mse_plain
        assert np.array_equal(ues.save(), plain.save())

    @pytest.mark.parametrize("h", [0.0, 0.7, 1.0])
    def test_gradients_match_autograd(self, h):
        """Test the modulated gradient: weights scaled by h+1, biases not."""
        net = UESNet([3, 4, 3, 2])
        net.init_weights(1.0, np.random.default_rng(5))
        rng = np.random.default_rng(6)
        x = rng.uniform(0, 1, 3)
        t = rng.uniform(0, 1, 2)
        grads_w, grads_b = reference_gradients(net, x, t, h=h, modulated=True)

        before_w = [net._w(l).copy() for l in range(1, net.num_layers)]
        before_b = [net.biases[l].copy() for l in range(1, net.num_layers)]
        net.train_batch(ExampleSet.from_arrays([x], [t], h=[h]), 0, 1, 1.0)

        for l in range(1, net.num_layers):
            assert np.allclose(before_w[l - 1] - net._w(l), grads_w[l - 1], rtol=1e-9, atol=1e-12)
            assert np.allclose(before_b[l - 1] - net.biases[l], grads_b[l - 1], rtol=1e-9, atol=1e-12)


class TestOutputBlendingNet:
    """Tests for the output blending network."""

    @pytest.fixture
    def net(self):
        net = OutputBlendingNet([2, 3, 2])
        net.init_weights(1.0, np.random.default_rng(7))
        return net

    def test_shape(self, net):
        """Test that both sub-networks share the public layout."""
        assert net.net_type is NetType.OUTPUTBLENDING
        assert net.get_layer_count() == 3
        assert [net.get_layer_size(i) for i in range(3)] == [2, 3, 2]
        assert net.get_data_size() == 2 * net.net0.get_data_size()

    def test_init_differs_between_subnets(self, net):
        """Test that the two sub-networks get different weights."""
        assert not np.array_equal(net.net0.save(), net.net1.save())

    def test_blend(self, net):
        """Test interpolation of the sub-network outputs by h."""
        x = np.array([0.3, 0.8])
        o0 = net.net0.run(x).copy()
        o1 = net.net1.run(x).copy()

        for h in (0.0, 0.25, 1.0):
            net.set_h(h)
            assert np.allclose(net.run(x), h * o1 + (1 - h) * o0, rtol=1e-12)

    def test_save_load(self, net):
        """Test that parameters are net0's followed by net1's."""
        data = net.save()
        half = net.net0.get_data_size()
        assert np.array_equal(data[:half], net.net0.save())
        assert np.array_equal(data[half:], net.net1.save())

        other = OutputBlendingNet([2, 3, 2])
        other.load(data)
        assert np.array_equal(other.save(), data)

    def test_batch_rejected(self, net):
        """Test that only single-example batches are supported."""
        with pytest.raises(UnsupportedOperationError):
            net.train_batch(random_set(4, 2, 2), 0, 2, 0.1)

    @pytest.mark.parametrize("h,trained", [(0.0, "net0"), (0.4, "net0"), (0.5, "net1"), (1.0, "net1")])
    def test_routing(self, net, h, trained):
        """Test that an example trains only the sub-network for its h."""
        other = "net1" if trained == "net0" else "net0"
        before_trained = getattr(net, trained).save()
        before_other = getattr(net, other).save()

        net.train_batch(random_set(1, 2, 2, h=[h]), 0, 1, 0.5)

        assert not np.array_equal(getattr(net, trained).save(), before_trained)
        assert np.array_equal(getattr(net, other).save(), before_other)

    def test_error_averaging(self, net, monkeypatch):
        """Test that errors are reported once per h=0/h=1 pair."""
        monkeypatch.setattr(net.net0, "train_batch", lambda *args: 0.2)
        monkeypatch.setattr(net.net1, "train_batch", lambda *args: 0.6)
        examples = random_set(4, 2, 2, h=[0, 1, 0, 1])

        errors = [net.train_batch(examples, i, 1, 0.1) for i in range(4)]
        assert errors == pytest.approx([0.2, 0.4, 0.4, 0.5])

    def test_init_resets_error_averaging(self, net, monkeypatch):
        """Test that reinitialising starts the error pairing afresh."""
        examples = random_set(2, 2, 2, h=[0, 1])
        net.train_batch(examples, 0, 1, 0.1)
        net.train_batch(examples, 1, 1, 0.1)
        assert net.last_error is not None

        net.init_weights(1.0, np.random.default_rng(11))
        assert net.last_error is None
        monkeypatch.setattr(net.net0, "train_batch", lambda *args: 0.3)
        assert net.train_batch(examples, 0, 1, 0.1) == 0.3


class TestHInputNet:
    """Tests for the h-as-input network."""

    def test_hidden_input(self):
        """Test that the modulator input is hidden from callers."""
        net = HInputNet([2, 3, 1])
        assert net.net_type is NetType.HINPUT
        assert net.get_layer_size(0) == 2
        assert net.input_count == 2
        assert net.layer_sizes[0] == 3

    def test_data_size(self):
        """Test that the parameter count includes the modulator input."""
        net = HInputNet([2, 3, 1])
        assert net.get_data_size() == 3 + 3 * 4 + 1 * 4

    def test_modulator_is_last_input(self):
        """Test equivalence with a plain network given h as a third input."""
        net = HInputNet([2, 3, 1])
        net.init_weights(1.0, np.random.default_rng(8))
        plain = BPNet([3, 3, 1])
        plain.load(net.save())

        for h in (0.0, 0.5, 1.0):
            net.set_h(h)
            out = net.run([0.2, 0.7]).copy()
            assert np.array_equal(net.outputs[0], [0.2, 0.7, h])
            assert np.array_equal(out, plain.run([0.2, 0.7, h]))

    def test_training_uses_example_h(self):
        """Test that training feeds each example's h as the extra input."""
        net = HInputNet([2, 2, 1])
        net.init_weights(1.0, np.random.default_rng(9))
        net.train_batch(random_set(1, 2, 1, h=[0.75]), 0, 1, 0.1)
        assert net.outputs[0][2] == 0.75


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
