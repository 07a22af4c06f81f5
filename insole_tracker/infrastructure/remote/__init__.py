"""Remote spreadsheet endpoint infrastructure package."""

from .apps_script_client import AppsScriptClient

__all__ = ["AppsScriptClient"]
