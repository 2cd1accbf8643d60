from pathlib import Path

import pydantic
import pytest

from transacto.client import OtcClient
from transacto.errors import ConfigError
from transacto.rpc.fake import FakeOtcChain
from transacto.settings import DEFAULT_RPC, Settings

CONTRACT = "0x" + "5a" * 20


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("TRANSACTO_RPC_URL", raising=False)
    monkeypatch.delenv("TRANSACTO_PRIVATE_KEY", raising=False)


def _write(tmp_path: Path, text: str) -> str:
    p = tmp_path / "cfg.yaml"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_load_yaml(tmp_path: Path):
    path = _write(
        tmp_path,
        f"""
rpc:
  url: http://localhost:8545
  max_retries: 5
  retry_delay_s: 0.2
contract:
  address: "{CONTRACT}"
  batch_size: 10
""",
    )
    s = Settings.load(path)
    assert s.rpc.url == "http://localhost:8545"
    assert s.rpc.max_retries == 5
    assert s.rpc.retry_delay_s == 0.2
    assert s.contract.address == CONTRACT
    assert s.contract.batch_size == 10
    assert s.has_private_key is False


def test_empty_file_gives_defaults(tmp_path: Path):
    s = Settings.load(_write(tmp_path, ""))
    assert s.rpc.url == DEFAULT_RPC
    assert s.rpc.max_retries == 3
    assert s.rpc.retry_delay_s == 0.5
    assert s.contract.address is None


def test_env_overlay(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TRANSACTO_RPC_URL", "http://env-node")
    monkeypatch.setenv("TRANSACTO_PRIVATE_KEY", "0x" + "11" * 32)
    s = Settings.load(_write(tmp_path, "rpc:\n  url: http://file-node\n"))
    assert s.rpc.url == "http://env-node"
    assert s.has_private_key
    assert "11" * 32 not in repr(s)


def test_bad_contract_address(tmp_path: Path):
    with pytest.raises(pydantic.ValidationError):
        Settings.load(_write(tmp_path, "contract:\n  address: '0x1234'\n"))


def test_batch_size_bounded(tmp_path: Path):
    with pytest.raises(pydantic.ValidationError):
        Settings.load(_write(tmp_path, "contract:\n  batch_size: 100\n"))


def test_client_requires_contract(tmp_path: Path):
    s = Settings.load(_write(tmp_path, ""))
    with pytest.raises(ConfigError):
        OtcClient.from_settings(s, FakeOtcChain())


def test_sample_config_loads():
    s = Settings.load(str(Path(__file__).parent.parent / "configs" / "dev.yaml"))
    assert s.contract.address is not None
    assert s.env == "dev"


def test_env_overlay_onto_empty_sections(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TRANSACTO_RPC_URL", "http://env-node")
    monkeypatch.setenv("TRANSACTO_PRIVATE_KEY", "0x" + "22" * 32)
    s = Settings.load(_write(tmp_path, "rpc:\nwallet:\n"))
    assert s.rpc.url == "http://env-node"
    assert s.rpc.max_retries == 3
    assert s.has_private_key
