import logging
import os

import matplotlib

os.environ["MPLBACKEND"] = "Agg"
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from xlsxboost.config.environment import SETTINGS_ENV_VARS  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """每个测试在独立的工作目录中运行，并清除 XLSXBOOST_* 环境变量"""
    monkeypatch.chdir(tmp_path)
    for env_var in SETTINGS_ENV_VARS:
        # 先 setenv 再 delenv，确保测试中由 .env 加载的变量在结束后被清除
        monkeypatch.setenv(env_var, "")
        monkeypatch.delenv(env_var)
    yield tmp_path
    plt.close("all")


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
