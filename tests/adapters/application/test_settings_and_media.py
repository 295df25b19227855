"""Tests for settings loading and the image host adapters."""

import pytest
from storefront.config import Settings
from storefront.media import FakeImageHost, ImageHostError, build_image_host, public_id_from_url


class TestSettingsFromEnv:
    def test_development_defaults(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "development")
        monkeypatch.delenv("ACCESS_TOKEN_SECRET", raising=False)
        monkeypatch.delenv("REFRESH_TOKEN_SECRET", raising=False)

        settings = Settings.from_env()
        assert settings.is_production is False
        assert settings.access_token_secret
        assert settings.refresh_token_secret
        assert settings.payment_gateway == "fake"

    def test_production_requires_secrets(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.delenv("ACCESS_TOKEN_SECRET", raising=False)
        monkeypatch.setenv("REFRESH_TOKEN_SECRET", "r")
        with pytest.raises(ValueError):
            Settings.from_env()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("ACCESS_TOKEN_SECRET", "a")
        monkeypatch.setenv("REFRESH_TOKEN_SECRET", "r")
        monkeypatch.setenv("CLIENT_URL", "https://shop.example.com/")
        monkeypatch.setenv("GATEWAY_TIMEOUT_SECONDS", "3.5")

        settings = Settings.from_env()
        assert settings.is_production is True
        assert settings.access_token_secret == "a"
        assert settings.client_url == "https://shop.example.com"
        assert settings.gateway_timeout_seconds == 3.5


class TestFakeImageHost:
    def test_upload_and_destroy(self):
        host = FakeImageHost()
        url = host.upload("data:image/png;base64,AAAA")
        public_id = public_id_from_url(url)

        assert url == f"https://images.fake/storefront/products/{public_id}.png"
        host.destroy(public_id)
        assert host.destroyed == [public_id]
        assert host.images == {}

    def test_unavailable(self):
        host = FakeImageHost()
        host.should_succeed = False
        with pytest.raises(ImageHostError):
            host.upload("data:...")


class TestPublicIdFromUrl:
    def test_strips_path_and_extension(self):
        url = "https://res.cloudinary.com/demo/image/upload/v1/products/abc123.jpg"
        assert public_id_from_url(url) == "abc123"


class TestBuildImageHost:
    def test_fake(self):
        assert isinstance(build_image_host(Settings(image_host="fake")), FakeImageHost)

    def test_cloudinary_requires_url(self):
        with pytest.raises(ValueError):
            build_image_host(Settings(image_host="cloudinary"))

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_image_host(Settings(image_host="s3"))
