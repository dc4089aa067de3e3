"""Unit tests for asset resolution."""

from typedcms.delivery.models import Asset
from typedcms.delivery.resolution import resolve_asset
from typedcms.delivery.resolution.assets import asset_url, resolve_assets, to_asset


def test_asset_url_adds_scheme_to_protocol_relative():
    assert asset_url("//images.example.net/a.png") == "https://images.example.net/a.png"
    assert asset_url("https://images.example.net/a.png") == "https://images.example.net/a.png"
    assert asset_url("") == ""


def test_to_asset_flattens_file_details(factory):
    asset = to_asset(factory.asset("img", title="Logo", url="//images.example.net/logo.png", width=64, height=32))
    assert asset == Asset(
        id="img",
        title="Logo",
        url="https://images.example.net/logo.png",
        width=64,
        height=32,
        size=1024,
    )
    assert asset.is_image


def test_resolve_asset_miss_is_zero_value(factory):
    assets = [factory.asset("img")]
    assert resolve_asset("missing", assets) == Asset()
    assert resolve_asset("", assets) == Asset()
    assert not Asset().is_image


def test_resolve_assets_reference_order(factory):
    assets = [factory.asset("a"), factory.asset("b")]
    resolved = resolve_assets(["b", "missing", "a"], assets)
    assert [a.id for a in resolved] == ["b", "a"]
