from nft_indexer.config import DEFAULT_INDEXER_URL, Config


def test_defaults(monkeypatch):
    for name in ("INDEXER_URL", "TERNOA_API_URL", "IPFS_GATEWAY", "TIMEOUT", "MAX_RETRIES",
                 "MAX_WORKERS", "ENRICH_SERIES", "LOG_LEVEL", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    cfg = Config.from_env()

    assert cfg.indexer_url == DEFAULT_INDEXER_URL == "https://indexer.chaos.ternoa.com/"
    assert cfg.ternoa_api_url is None
    assert cfg.max_retries == 0
    assert cfg.max_workers == 10
    assert cfg.enrich_series is True
    assert cfg.cors_origins == ["*"]


def test_from_env(monkeypatch):
    monkeypatch.setenv("INDEXER_URL", "http://localhost:3000/")
    monkeypatch.setenv("TERNOA_API_URL", "http://localhost:4000")
    monkeypatch.setenv("TIMEOUT", "5")
    monkeypatch.setenv("MAX_RETRIES", "2")
    monkeypatch.setenv("ENRICH_SERIES", "false")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.test, https://b.test")

    cfg = Config.from_env()

    assert cfg.indexer_url == "http://localhost:3000/"
    assert cfg.ternoa_api_url == "http://localhost:4000"
    assert cfg.timeout == 5
    assert cfg.max_retries == 2
    assert cfg.enrich_series is False
    assert cfg.log_level == "DEBUG"
    assert cfg.cors_origins == ["https://a.test", "https://b.test"]
