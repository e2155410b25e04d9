from __future__ import annotations
import logging

from arena_maps.editor.config import AppConfig
from arena_maps.editor.app import MapEditorApp


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = MapEditorApp(AppConfig())
    app.run()


if __name__ == "__main__":
    main()
