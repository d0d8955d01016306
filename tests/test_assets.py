"""Tests for linkbox.assets: sealed bundle and asset responses."""

import pytest

from linkbox.assets import AssetBundle, guess_content_type, serve_asset
from linkbox.errors import NotFound


@pytest.fixture
def bundle() -> AssetBundle:
    return AssetBundle({"style.css": b"body{}", "app.js": b"1;", "img/logo.svg": b"<svg/>"})


class TestAssetBundle:
    def test_from_directory(self, tmp_path) -> None:
        (tmp_path / "style.css").write_bytes(b"body{}")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "x.txt").write_bytes(b"x")
        bundle = AssetBundle.from_directory(tmp_path)
        assert dict(bundle) == {"nested/x.txt": b"x", "style.css": b"body{}"}

    def test_loaded_once(self, tmp_path) -> None:
        (tmp_path / "a.css").write_bytes(b"old")
        bundle = AssetBundle.from_directory(tmp_path)
        (tmp_path / "a.css").write_bytes(b"new")
        assert bundle["a.css"] == b"old"

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(NotADirectoryError):
            AssetBundle.from_directory(tmp_path / "nope")

    def test_from_package(self) -> None:
        bundle = AssetBundle.from_package()
        assert "style.css" in bundle
        assert "app.js" in bundle

    def test_read_only(self, bundle) -> None:
        with pytest.raises(TypeError):
            bundle["new.css"] = b""  # type: ignore[index]


class TestContentType:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("style.css", "text/css"),
            ("app.js", ("text/javascript", "application/javascript")),
            ("logo.svg", "image/svg+xml"),
            ("blob.zzz", "application/octet-stream"),
        ],
    )
    def test_guess(self, path: str, expected: str | tuple[str, ...]) -> None:
        result = guess_content_type(path)
        if isinstance(expected, tuple):
            assert result in expected
        else:
            assert result == expected


class TestServeAsset:
    def test_found(self, bundle) -> None:
        response = serve_asset(bundle, "style.css")
        assert response.status == 200
        assert response.body == b"body{}"
        assert response.content_type == "text/css"
        assert response.header("Cache-Control") == "public, max-age=604800"

    def test_full_path_prefix_stripped(self, bundle) -> None:
        assert serve_asset(bundle, "/pub/img/logo.svg").body == b"<svg/>"

    def test_custom_cache_control(self, bundle) -> None:
        response = serve_asset(bundle, "app.js", cache_control="no-cache")
        assert response.header("cache-control") == "no-cache"

    def test_missing(self, bundle) -> None:
        with pytest.raises(NotFound):
            serve_asset(bundle, "does-not-exist.js")

    def test_traversal_cannot_escape(self, bundle) -> None:
        with pytest.raises(NotFound):
            serve_asset(bundle, "../pyproject.toml")
