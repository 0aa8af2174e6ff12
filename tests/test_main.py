import json
import logging
import sys

import pytest
from loguru import logger

from workbench_equip import main as main_module


@pytest.fixture
def plugin_env(tmp_path, monkeypatch):
    config_path = tmp_path / "config" / "WorkbenchEquipOnly.json"
    monkeypatch.setenv("CONFIG_PATH", str(config_path))
    monkeypatch.delenv("LANG_DIR", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield config_path
    logger.remove()
    logger.configure(extra={})
    logger.add(sys.stderr)
    logging.basicConfig(handlers=[], force=True)


@pytest.mark.asyncio
async def test_main_async_creates_config(plugin_env):
    await main_module.main_async()

    with open(plugin_env, "r", encoding="utf-8") as f:
        saved = json.load(f)
    assert saved["Version"] == "1.0.1"
    assert saved["Required Workbench Level For Attachments"]["weapon.mod.8x.scope"] == 3


def test_main_runs_and_logs_table(plugin_env, capsys):
    main_module.main()

    out = capsys.readouterr().out
    assert "weapon.mod.silencer" in out
    assert plugin_env.exists()


def test_main_exits_on_broken_config(plugin_env):
    plugin_env.parent.mkdir(parents=True)
    plugin_env.write_text("{broken", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 1
