import subprocess

import pytest

from boxman_api.config import reload_cfg

LIST_UNITS_OUTPUT = """\
UNIT                        LOAD   ACTIVE SUB     DESCRIPTION
cron.service                loaded active running Regular background program processing daemon
nginx.service               loaded active running A high performance web server
pocketbase.service          loaded active running pocketbase service
short line
ssh.service                 loaded active
"""


@pytest.fixture(autouse=True)
def clean_cfg(monkeypatch):
    for key in ("BOXMAN_CONFIG", "BOXMAN_SYSTEMCTL", "BOXMAN_LIST_TIMEOUT", "BOXMAN_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    reload_cfg()
    yield
    reload_cfg()


@pytest.fixture
def home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    return str(tmp_path)


@pytest.fixture
def fake_systemctl(monkeypatch):
    calls = []

    def install(stdout=LIST_UNITS_OUTPUT, returncode=0, exc=None):
        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            if exc is not None:
                raise exc
            return subprocess.CompletedProcess(cmd, returncode, stdout=stdout)

        monkeypatch.setattr("boxman_api.services.subprocess.run", fake_run)
        return calls

    return install
