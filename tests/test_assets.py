# tests/test_assets.py
from core.assets import AssetRegistry


def test_admin_assets(plugin, host):
    assets = host.enqueue_assets("admin")
    assert list(assets.styles) == ["wp-book"]
    assert assets.styles["wp-book"].url == "/static/css/wp-book-admin.css?ver=1.0.0"
    script = assets.scripts["wp-book"]
    assert script.src == "/static/js/wp-book-admin.js"
    assert script.deps == ("jquery",)


def test_public_assets(plugin, host):
    assets = host.enqueue_assets("public")
    assert assets.styles["wp-book"].src == "/static/css/wp-book-public.css"
    assert assets.scripts["wp-book"].src == "/static/js/wp-book-public.js"


def test_block_editor_assets(plugin, host):
    assets = host.enqueue_assets("editor")
    script = assets.scripts["custom-wp-block"]
    assert script.src == "/static/js/custom-wp-block.js"
    assert "wp-blocks" in script.deps
    assert "wp-block-editor" in script.deps
    assert not assets.styles


def test_first_enqueue_of_a_handle_wins():
    assets = AssetRegistry("public")
    assets.enqueue_style("theme", "/a.css", version="1")
    assets.enqueue_style("theme", "/b.css", version="2")
    assert assets.styles["theme"].url == "/a.css?ver=1"
    assert assets.handles() == ["theme"]
