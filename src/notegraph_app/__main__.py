"""
NoteGraph application entry point.

    python -m notegraph_app [clusters.json] [-v]
    notegraph [clusters.json]          (when installed)

clusters.json holds a clustering result: a list of clusters with note
children. Without it a built-in sample is shown.
"""

import argparse
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path

logger = logging.getLogger("notegraph_app")

CRASH_LOG_NAME = "crash_log.txt"


def install_crash_log(log_file: Path) -> None:
    """
    Route uncaught exceptions (including ones raised inside Qt slots) to a
    crash log before the default hook prints them.
    """
    def crash_hook(exctype, value, tb):
        report = "".join(traceback.format_exception(exctype, value, tb))
        banner = "=" * 60
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"\n{banner}\nCRASH {datetime.now():%Y-%m-%d %H:%M:%S}\n{banner}\n{report}\n")
        logger.critical("Unhandled %s, details in %s", exctype.__name__, log_file)
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = crash_hook


def load_tree(path):
    """Load a cluster tree from a JSON file, or the built-in sample."""
    from notegraph_core.services.tree_loader import parse_cluster_tree

    if path is None:
        from notegraph_app.resources.sample_tree import SAMPLE_CLUSTERS, SAMPLE_NOTE_TITLES
        return parse_cluster_tree(SAMPLE_CLUSTERS), SAMPLE_NOTE_TITLES

    text = Path(path).read_text(encoding="utf-8")
    return parse_cluster_tree(text), {}


def main(argv=None):
    """Launch the NoteGraph window."""
    parser = argparse.ArgumentParser(prog="notegraph", description="Interactive note cluster graph")
    parser.add_argument("tree", nargs="?", help="JSON file with a clustering result")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    install_crash_log(Path.cwd() / CRASH_LOG_NAME)

    from PyQt6.QtWidgets import QApplication
    from notegraph_app.resources.styles import DARK_STYLESHEET
    from notegraph_app.views.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    app.setApplicationName("NoteGraph")
    app.setStyle("Fusion")
    app.setStyleSheet(DARK_STYLESHEET)

    tree, note_titles = load_tree(args.tree)
    logger.info("Loaded %d clusters", len(tree))

    window = MainWindow(tree, note_titles)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
