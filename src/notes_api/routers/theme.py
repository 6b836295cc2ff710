from fastapi import APIRouter, Depends

from notes_api.dependencies import get_theme
from notes_api.schemas import ThemeResponse
from notes_api.theme import ThemeToggle

router = APIRouter()


def _theme_response(theme: ThemeToggle) -> ThemeResponse:
    return ThemeResponse(is_dark=theme.is_dark, marker=theme.marker)


@router.get("/theme", response_model=ThemeResponse)
async def get_theme_mode(theme: ThemeToggle = Depends(get_theme)):
    return _theme_response(theme)


@router.post("/theme/toggle", response_model=ThemeResponse)
async def toggle_theme(theme: ThemeToggle = Depends(get_theme)):
    """Flip between light and dark and remember the choice."""
    theme.toggle()
    return _theme_response(theme)
