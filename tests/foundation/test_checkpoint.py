import pickle

import numpy as np
import pytest

from mocma.foundation.checkpoint import CHECKPOINT_VERSION, load_checkpoint, restore_rng, save_checkpoint
from mocma.foundation.exceptions import CheckpointError


def test_save_and_load(tmp_path):
    rng = np.random.default_rng(3)
    path = save_checkpoint(tmp_path / "sub" / "state", optimizer_state={"generation": 2}, rng_state=rng.bit_generator.state)

    assert path.suffix == ".ckpt"
    data = load_checkpoint(path)
    assert data["version"] == CHECKPOINT_VERSION
    assert data["optimizer"] == {"generation": 2}
    assert data["extra"] == {}

    expected = rng.random(4)
    other = np.random.default_rng(0)
    restore_rng(other, data["rng_state"])
    np.testing.assert_array_equal(other.random(4), expected)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_checkpoint(tmp_path / "nope.ckpt")


def test_wrong_version(tmp_path):
    path = tmp_path / "old.ckpt"
    path.write_bytes(pickle.dumps({"version": 0, "optimizer": {}}))
    with pytest.raises(CheckpointError, match="Unsupported checkpoint version"):
        load_checkpoint(path)


def test_not_a_checkpoint(tmp_path):
    path = tmp_path / "garbage.ckpt"
    path.write_bytes(b"")
    with pytest.raises(CheckpointError):
        load_checkpoint(path)
    path.write_bytes(pickle.dumps([1, 2, 3]))
    with pytest.raises(CheckpointError):
        load_checkpoint(path)
