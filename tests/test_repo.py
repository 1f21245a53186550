import json
import pytest
from chainnode_core.config import Config, load_config
from chainnode_core.errors import RepoError, RepoExistsError
from chainnode_core.repo import init_fs_repo, open_fs_repo


def test_config_roundtrip_keeps_unknown_sections():
    cfg = Config.from_dict({"wallet": {"default_address": "t1x"}, "heartbeat": {"nick": "n"}})
    d = cfg.to_dict()
    assert d["wallet"]["default_address"] == "t1x"
    assert d["heartbeat"] == {"nick": "n"}
    assert d["mpool"]["max_pool_size"] == 10000


def test_init_and_open_fs_repo(tmp_path):
    path = str(tmp_path / "repo")
    init_fs_repo(path)
    repo = open_fs_repo(path)
    assert repo.config().wallet.default_address == ""
    repo.datastore().put("/a", b"1")
    repo.close()
    assert open_fs_repo(path).datastore().get("/a") == b"1"


def test_init_refuses_non_empty_dir(tmp_path):
    (tmp_path / "junk").write_text("x")
    with pytest.raises(RepoExistsError):
        init_fs_repo(str(tmp_path))


def test_open_missing_repo(tmp_path):
    with pytest.raises(RepoError):
        open_fs_repo(str(tmp_path))


def test_replace_config_writes_whole_document(tmp_path):
    path = str(tmp_path / "repo")
    init_fs_repo(path, Config.from_dict({"custom": {"k": [1, 2]}}))
    repo = open_fs_repo(path)
    cfg = repo.config()
    cfg.api.address = "/ip4/0.0.0.0/tcp/1"
    repo.replace_config(cfg)

    with open(tmp_path / "repo" / "config.json") as f:
        on_disk = json.load(f)
    assert on_disk["custom"] == {"k": [1, 2]}
    assert on_disk["api"]["address"] == "/ip4/0.0.0.0/tcp/1"
    assert load_config(str(tmp_path / "repo" / "config.json")).to_dict() == cfg.to_dict()


def test_config_keeps_unknown_keys_in_known_sections():
    cfg = Config.from_dict({"wallet": {"default_address": "", "label": "main"}, "api": {"timeout": 5}})
    cfg.wallet.default_address = "t1y"
    d = cfg.to_dict()
    assert d["wallet"] == {"default_address": "t1y", "label": "main"}
    assert d["api"]["timeout"] == 5
    assert d["api"]["address"] == "/ip4/127.0.0.1/tcp/3453"


@pytest.mark.parametrize("raw", ['{"wallet": ["x"]}', '{"mpool": {"max_pool_size": "lots"}}', "{not json"])
def test_open_rejects_malformed_config(tmp_path, raw):
    (tmp_path / "config.json").write_text(raw)
    with pytest.raises(RepoError):
        open_fs_repo(str(tmp_path))
