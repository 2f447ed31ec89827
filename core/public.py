# core/public.py


class BookPublic:
    """Public-facing side: only stylesheet and script registration"""

    def __init__(self, plugin_name: str, version: str):
        self.plugin_name = plugin_name
        self.version = version

    def enqueue_styles(self, assets) -> None:
        assets.enqueue_style(self.plugin_name, "/static/css/wp-book-public.css", (), self.version)

    def enqueue_scripts(self, assets) -> None:
        assets.enqueue_script(self.plugin_name, "/static/js/wp-book-public.js", ("jquery",), self.version)
