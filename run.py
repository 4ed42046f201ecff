# -*- coding: utf-8 -*-

"""
Main entry point for launching the MarkupDesktop application.
"""

import logging
import sys
import tkinter as tk

import sv_ttk

from markup_desktop.app import MarkupDesktop
from markup_desktop.config import ConfigManager
from markup_desktop.logging_config import setup_logging


def main(argv=None):
    """
    Configure logging, main window, and launch application.

    An optional first argument names a document to open at start-up.
    """
    setup_logging()
    argv = sys.argv[1:] if argv is None else argv

    window = ConfigManager().get_app_config().get("window", {}) or {}
    root = tk.Tk()
    window_width = int(window.get("width", 900))
    window_height = int(window.get("height", 700))
    # Calculate position to center the window
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = (screen_width // 2) - (window_width // 2)
    pos_y = (screen_height // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    sv_ttk.set_theme(window.get("theme", "light"))

    app = MarkupDesktop(root)
    if argv:
        app.open_path(argv[0])

    root.mainloop()


if __name__ == '__main__':
    main()

    logging.info("===== Application terminated =====")
