from fastapi import Request

from notes_api.adapters.base import EditorAdapter
from notes_api.config.settings import Settings
from notes_api.theme import ThemeToggle


def get_editor(request: Request) -> EditorAdapter:
    """Editor adapter dependency."""
    return request.app.state.editor


def get_theme(request: Request) -> ThemeToggle:
    return request.app.state.theme


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
