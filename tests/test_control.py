import threading

import pytest

from ttl_memoize import control as control_module
from ttl_memoize.config import MemoizeConfig
from ttl_memoize.control import GlobalControl


@pytest.fixture
def fresh_default(monkeypatch):
    monkeypatch.delenv("TTL_MEMOIZE_DISABLED", raising=False)
    control_module.reset_default_control()
    yield
    control_module.reset_default_control()


def test_control_defaults():
    control = GlobalControl()
    assert control.is_bypassed() is False
    assert control.current_epoch() == 0


def test_disable_and_enable_toggle_bypass():
    control = GlobalControl()
    control.disable()
    assert control.is_bypassed() is True
    control.enable()
    assert control.is_bypassed() is False


def test_reset_all_bumps_epoch():
    control = GlobalControl()
    assert control.reset_all() == 1
    assert control.reset_all() == 2
    assert control.current_epoch() == 2


def test_from_config_honours_disabled():
    assert GlobalControl.from_config(MemoizeConfig(disabled=True)).is_bypassed() is True
    assert GlobalControl.from_config(MemoizeConfig()).is_bypassed() is False


def test_reset_all_is_atomic_across_threads():
    control = GlobalControl()

    def worker():
        for _ in range(50):
            control.reset_all()

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert control.current_epoch() == 1000


def test_default_control_is_shared_until_reset(fresh_default):
    first = control_module.default_control()
    assert control_module.default_control() is first
    control_module.reset_default_control()
    assert control_module.default_control() is not first


def test_default_control_reads_config(fresh_default, monkeypatch):
    monkeypatch.setenv("TTL_MEMOIZE_DISABLED", "true")
    control_module.reset_default_control()
    assert control_module.default_control().is_bypassed() is True


def test_module_level_switches_use_default(fresh_default):
    control_module.disable()
    assert control_module.default_control().is_bypassed() is True
    control_module.enable()
    assert control_module.default_control().is_bypassed() is False
    assert control_module.reset_all() == 1
    assert control_module.default_control().current_epoch() == 1
