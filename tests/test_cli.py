import json

from typer.testing import CliRunner

from merkle_cli.__main__ import app
from merkle_core.hasher import SimpleHasher
from merkle_core.tree import MerkleTree

runner = CliRunner()


def _leaf_files(tmp_path, values):
    paths = []
    for i, v in enumerate(values):
        p = tmp_path / f"leaf{i}.bin"
        p.write_bytes(v)
        paths.append(str(p))
    return paths


def test_root_over_files(tmp_path):
    files = _leaf_files(tmp_path, [b"a", b"b", b"c"])
    r = runner.invoke(app, ["root", *files])
    assert r.exit_code == 0, r.output
    assert MerkleTree.from_leaves([b"a", b"b", b"c"]).root_hex() in r.output.replace("\n", "")


def test_root_over_lines_with_simple_hasher(tmp_path):
    p = tmp_path / "leaves.txt"
    p.write_bytes(b"a\nb\nc\n")
    r = runner.invoke(app, ["root", str(p), "--lines", "--hasher", "simple"])
    assert r.exit_code == 0, r.output
    expected = MerkleTree.from_leaves([b"a", b"b", b"c"], SimpleHasher()).root_hex()
    assert expected in r.output.replace("\n", "")


def test_root_rejects_empty_line(tmp_path):
    p = tmp_path / "leaves.txt"
    p.write_bytes(b"a\n\nc\n")
    r = runner.invoke(app, ["root", str(p), "--lines"])
    assert r.exit_code == 1
    assert "leaves.txt:2" in r.output.replace("\n", "")


def test_root_rejects_empty_file(tmp_path):
    files = _leaf_files(tmp_path, [b"a", b""])
    r = runner.invoke(app, ["root", *files])
    assert r.exit_code == 1
    assert "empty" in r.output.replace("\n", "")


def test_unknown_hasher(tmp_path):
    files = _leaf_files(tmp_path, [b"a"])
    r = runner.invoke(app, ["root", *files, "--hasher", "md5"])
    assert r.exit_code == 1
    assert "unknown hasher" in r.output.replace("\n", "")


def test_missing_file(tmp_path):
    r = runner.invoke(app, ["root", str(tmp_path / "nope")])
    assert r.exit_code == 1
    assert "No such file" in r.output.replace("\n", "")


def test_oversized_leaf_file(tmp_path, monkeypatch):
    from merkle_core import settings as settings_mod

    monkeypatch.setattr(settings_mod.settings, "max_leaf_bytes", 4)
    files = _leaf_files(tmp_path, [b"0123456789"])
    r = runner.invoke(app, ["root", *files])
    assert r.exit_code == 1
    assert "MERKLE_MAX_LEAF_BYTES" in r.output.replace("\n", "")


def test_prove_then_verify(tmp_path):
    files = _leaf_files(tmp_path, [b"a", b"b", b"c", b"d", b"e"])
    out = tmp_path / "proof.json"
    r = runner.invoke(app, ["prove", *files, "--index", "4", "--out", str(out)])
    assert r.exit_code == 0, r.output
    body = json.loads(out.read_text())
    assert body["index"] == 4
    assert len(body["siblings"]) == 3

    root_hex = MerkleTree.from_leaves([b"a", b"b", b"c", b"d", b"e"]).root_hex()
    r = runner.invoke(app, ["verify", files[4], str(out), "--root", root_hex])
    assert r.exit_code == 0, r.output
    assert "proof_valid" in r.output.replace("\n", "")
    assert "True" in r.output.replace("\n", "")

    r = runner.invoke(app, ["verify", files[3], str(out), "--root", root_hex])
    assert r.exit_code == 1
    assert "False" in r.output.replace("\n", "")


def test_prove_prints_json_without_out(tmp_path):
    files = _leaf_files(tmp_path, [b"x"])
    r = runner.invoke(app, ["prove", *files, "--index", "0"])
    assert r.exit_code == 0, r.output
    assert '{"index":0,"siblings":[]}' in r.output.replace("\n", "")


def test_prove_out_of_range(tmp_path):
    files = _leaf_files(tmp_path, [b"a", b"b"])
    r = runner.invoke(app, ["prove", *files, "--index", "2"])
    assert r.exit_code == 1
    assert "out of bounds" in r.output.replace("\n", "")


def test_verify_malformed_proof(tmp_path):
    files = _leaf_files(tmp_path, [b"a"])
    bad = tmp_path / "proof.json"
    bad.write_text('{"index": 0, "siblings": ["nothex"]}')
    r = runner.invoke(app, ["verify", files[0], str(bad), "--root", "00" * 32])
    assert r.exit_code == 1
    assert "invalid input" in r.output.replace("\n", "")


def test_log_level_option(tmp_path):
    files = _leaf_files(tmp_path, [b"a"])
    r = runner.invoke(app, ["--log-level", "debug", "root", *files])
    assert r.exit_code == 0, r.output
    r = runner.invoke(app, ["--log-level", "chatty", "root", *files])
    assert r.exit_code != 0
