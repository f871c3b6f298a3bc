"""
Tests for the network factory and saved network files.
"""

import numpy as np
import pytest

from uesmann import (
    NetFactory, NetType, BPNet, UESNet, OutputBlendingNet, HInputNet,
    ConfigurationError, LoadError
)


ALL_TYPES = [NetType.PLAIN, NetType.OUTPUTBLENDING, NetType.HINPUT, NetType.UESMANN]


class TestMakeNet:
    """Tests for network creation."""

    @pytest.mark.parametrize("net_type,cls", [
        (NetType.PLAIN, BPNet),
        (NetType.OUTPUTBLENDING, OutputBlendingNet),
        (NetType.HINPUT, HInputNet),
        (NetType.UESMANN, UESNet),
    ])
    def test_make_net(self, net_type, cls):
        """Test that each type builds its class with the requested layout."""
        net = NetFactory.make_net(net_type, [4, 3, 2])
        assert type(net) is cls
        assert net.net_type is net_type
        assert [net.get_layer_size(i) for i in range(3)] == [4, 3, 2]

    def test_make_net_by_name(self):
        """Test creation from a type name."""
        assert isinstance(NetFactory.make_net("ues", [2, 2, 1]), UESNet)

    def test_make_net_for(self, standard_set):
        """Test a single-hidden-layer network sized for an example set."""
        net = NetFactory.make_net_for(NetType.HINPUT, standard_set, 7)
        assert [net.get_layer_size(i) for i in range(3)] == [5, 7, 2]

    def test_bad_layers(self):
        """Test that bad layouts are rejected."""
        with pytest.raises(ConfigurationError):
            NetFactory.make_net(NetType.UESMANN, [2])


class TestSaveLoad:
    """Tests for saving and loading network files."""

    @pytest.mark.parametrize("net_type", ALL_TYPES)
    def test_round_trip(self, tmp_path, net_type):
        """Test that a loaded network matches the saved one."""
        net = NetFactory.make_net(net_type, [3, 4, 2])
        net.init_weights(-1, np.random.default_rng(0))
        path = tmp_path / "net.bin"
        NetFactory.save(path, net)

        loaded = NetFactory.load(path)
        assert type(loaded) is type(net)
        assert [loaded.get_layer_size(i) for i in range(3)] == [3, 4, 2]
        assert np.array_equal(loaded.save(), net.save())

        x = np.array([0.1, 0.5, 0.9])
        for h in (0.0, 1.0):
            net.set_h(h)
            loaded.set_h(h)
            assert np.array_equal(loaded.run(x), net.run(x))

    def test_file_layout(self, tmp_path):
        """Test the header and parameter block sizes."""
        net = NetFactory.make_net(NetType.HINPUT, [2, 3, 1])
        net.init_weights(-1, np.random.default_rng(1))
        path = tmp_path / "net.bin"
        NetFactory.save(path, net)

        raw = path.read_bytes()
        header = np.frombuffer(raw[:20], dtype="=i4")
        assert list(header) == [1002, 3, 2, 3, 1]
        assert len(raw) == 20 + 8 * net.get_data_size()
        assert np.array_equal(np.frombuffer(raw[20:], dtype="=f8"), net.save())

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises LoadError."""
        with pytest.raises(LoadError):
            NetFactory.load(tmp_path / "missing.bin")

    def test_unknown_type(self, tmp_path):
        """Test that an unknown type tag raises LoadError."""
        path = tmp_path / "net.bin"
        path.write_bytes(np.array([999, 2, 1, 1], dtype="=i4").tobytes() + np.zeros(3).tobytes())
        with pytest.raises(LoadError):
            NetFactory.load(path)

    @pytest.mark.parametrize("header", [[1000, 1, 2], [1000, 5000, 2], [1000, 2, 0, 1]])
    def test_bad_layers(self, tmp_path, header):
        """Test that impossible layouts raise LoadError."""
        path = tmp_path / "net.bin"
        path.write_bytes(np.array(header, dtype="=i4").tobytes() + np.zeros(8).tobytes())
        with pytest.raises(LoadError):
            NetFactory.load(path)

    @pytest.mark.parametrize("cut", [4, 8, 60])
    def test_truncated(self, tmp_path, cut):
        """Test that truncated files raise LoadError."""
        net = NetFactory.make_net(NetType.UESMANN, [2, 2, 1])
        net.init_weights(-1, np.random.default_rng(2))
        path = tmp_path / "net.bin"
        NetFactory.save(path, net)
        raw = path.read_bytes()
        path.write_bytes(raw[:-cut])

        with pytest.raises(LoadError):
            NetFactory.load(path)

    def test_trailing_bytes(self, tmp_path):
        """Test that extra data after the parameters raises LoadError."""
        net = NetFactory.make_net(NetType.PLAIN, [2, 2, 1])
        path = tmp_path / "net.bin"
        NetFactory.save(path, net)
        path.write_bytes(path.read_bytes() + b"\0" * 8)

        with pytest.raises(LoadError):
            NetFactory.load(path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
