"""Interactive boot menu engine."""

from loader_menu.__version__ import __version__
from loader_menu.menu import MenuEngine, MenuModel
from loader_menu.menu.definitions import build_menu_model

__all__ = ["MenuEngine", "MenuModel", "__version__", "build_menu_model"]
