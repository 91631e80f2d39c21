"""Main window of the partner management application."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Sequence

from .material import MaterialsTab
from .partners import PartnersTab
from .sales import SalesTab
from .storage import Database
from .theme import CustomTheme

log = logging.getLogger(__name__)

WINDOW_TITLE = "Управление Партнерами"
WINDOW_SIZE = "1200x600"
ICON_PATH = "./icon.ico"
DEFAULT_DB_PATH = "./test.db"


class App:
    """The application: a database connection and the window built on it."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH) -> None:
        self.db = Database(db_path)
        self.theme = CustomTheme()
        self.root: Any = None

    def _load_theme(self, root: Any) -> None:
        import tkinter as tk

        try:
            root.iconbitmap(ICON_PATH)
        except tk.TclError as exc:
            log.error("%s", exc)
        self.theme.apply(root)

    def _init_tabs(self, root: Any) -> Any:
        from tkinter import messagebox, ttk

        notebook = ttk.Notebook(root)
        partners = PartnersTab(notebook, self.db)
        if not partners.partners:
            root.after(
                0,
                lambda: messagebox.showinfo(
                    "Нет данных",
                    "Партнеры не найдены. Добавьте нового партнера.",
                    parent=root,
                ),
            )
        notebook.add(partners.frame, text="Партнеры")
        notebook.add(SalesTab(notebook, self.db).frame, text="Продажи")
        notebook.add(MaterialsTab(notebook, self.db).frame, text="Расчет материалов")
        return notebook

    def run(self) -> None:
        """Open the main window and run until it is closed."""
        import tkinter as tk

        try:
            self.root = tk.Tk()
            self.root.title(WINDOW_TITLE)
            self.root.geometry(WINDOW_SIZE)
            self._load_theme(self.root)
            notebook = self._init_tabs(self.root)
            notebook.pack(fill="both", expand=True)
            self.root.mainloop()
        finally:
            self.db.close()


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="partnerdesk", description=WINDOW_TITLE)
    parser.add_argument(
        "--db",
        default=DEFAULT_DB_PATH,
        help="path of the SQLite database file (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the application."""
    args = _parse_args(argv)
    App(args.db).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())