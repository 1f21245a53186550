import json
from click.testing import CliRunner
from chainnode_core.cli import cli
from chainnode_core.config import load_config
from chainnode_core.crypto import generate_key_info
from chainnode_core.repo import open_fs_repo


def test_cli_init_creates_repo(tmp_path, peer_key):
    repodir = tmp_path / "node"
    key_file = tmp_path / "peer.der"
    key_file.write_bytes(peer_key.to_bytes())
    default = generate_key_info()
    wallet_file = tmp_path / "wallet.json"
    wallet_file.write_text(json.dumps(default.to_dict()))
    extra = [generate_key_info(), generate_key_info()]
    import_file = tmp_path / "imports.json"
    import_file.write_text(json.dumps([k.to_dict() for k in extra]))
    genesis_file = tmp_path / "genesis.json"
    genesis_file.write_text(json.dumps({"allocations": {default.address(): "500"}, "timestamp": 1}))

    result = CliRunner().invoke(cli, [
        "init", "--repodir", str(repodir),
        "--peer-key-file", str(key_file),
        "--wallet-file", str(wallet_file),
        "--import-key-file", str(import_file),
        "--genesis-file", str(genesis_file),
    ])

    assert result.exit_code == 0, result.output
    assert f"default wallet address: {default.address()}" in result.output
    assert load_config(str(repodir / "config.json")).wallet.default_address == default.address()
    repo = open_fs_repo(str(repodir))
    assert repo.keystore().get("self") == peer_key
    repo.close()


def test_cli_init_refuses_existing_repo(tmp_path):
    (tmp_path / "config.json").write_text("{}")
    result = CliRunner().invoke(cli, ["init", "--repodir", str(tmp_path)])
    assert result.exit_code == 1
    assert "not empty" in result.output


def test_cli_rejects_bad_wallet_file(tmp_path):
    bad = tmp_path / "wallet.json"
    bad.write_text(json.dumps({"type": "secp256k1"}))
    result = CliRunner().invoke(cli, ["init", "--repodir", str(tmp_path / "n"), "--wallet-file", str(bad)])
    assert result.exit_code == 2
    assert not (tmp_path / "n").exists()


def test_cli_reports_failing_stage(tmp_path):
    bad = tmp_path / "wallet.json"
    bad.write_text(json.dumps({"type": "secp256k1", "private_key": "AAAA"}))
    result = CliRunner().invoke(cli, ["init", "--repodir", str(tmp_path / "n"), "--wallet-file", str(bad)])
    assert result.exit_code == 1
    assert "default key" in result.output


def test_cli_rejects_non_object_import_entry(tmp_path):
    bad = tmp_path / "imports.json"
    bad.write_text(json.dumps(["abc"]))
    result = CliRunner().invoke(cli, ["init", "--repodir", str(tmp_path / "n"), "--import-key-file", str(bad)])
    assert result.exit_code == 2
    assert not isinstance(result.exception, TypeError)
    assert not (tmp_path / "n").exists()
