from ttl_memoize.config import DEFAULT_TTL, load_config


def test_load_config_defaults(monkeypatch):
    monkeypatch.delenv("TTL_MEMOIZE_DISABLED", raising=False)
    monkeypatch.delenv("TTL_MEMOIZE_DEFAULT_TTL", raising=False)
    config = load_config()
    assert config.disabled is False
    assert config.default_ttl == DEFAULT_TTL == 1000


def test_load_config_disabled_flag(monkeypatch):
    monkeypatch.setenv("TTL_MEMOIZE_DISABLED", "yes")
    assert load_config().disabled is True
    monkeypatch.setenv("TTL_MEMOIZE_DISABLED", "off")
    assert load_config().disabled is False


def test_load_config_default_ttl(monkeypatch):
    monkeypatch.setenv("TTL_MEMOIZE_DEFAULT_TTL", " 25 ")
    assert load_config().default_ttl == 25


def test_load_config_invalid_default_ttl_falls_back(monkeypatch):
    monkeypatch.setenv("TTL_MEMOIZE_DEFAULT_TTL", "abc")
    assert load_config().default_ttl == DEFAULT_TTL
    monkeypatch.setenv("TTL_MEMOIZE_DEFAULT_TTL", "-5")
    assert load_config().default_ttl == DEFAULT_TTL
