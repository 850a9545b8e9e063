import httpx
from pathlib import Path
from typing import Annotated
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import get_settings
from ..database.core import SessionLocal
from ..storage.sql import SqlStateStore
from .client import ProxySearchClient
from .models import DashboardSnapshot, Tab
from .service import Dashboard


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Base URL for in-process calls to the proxy endpoint; never leaves the process
IN_PROCESS_BASE_URL = "http://tubedeck.internal"

router = APIRouter(tags=["dashboard"])


def get_dashboard(request: Request) -> Dashboard:
    """Provide the single dashboard instance, loading it from the SQL store on first use"""
    dashboard = getattr(request.app.state, "dashboard", None)
    if dashboard is None:
        settings = get_settings()
        store = SqlStateStore(SessionLocal, reset_on_corruption=settings.state_reset_on_corruption)
        client = ProxySearchClient(IN_PROCESS_BASE_URL, transport=httpx.ASGITransport(app=request.app))
        dashboard = Dashboard(store, client)
        dashboard.load()
        request.app.state.dashboard = dashboard
    return dashboard


CurrentDashboard = Annotated[Dashboard, Depends(get_dashboard)]


def _back_to_dashboard() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(request: Request, dashboard: CurrentDashboard):
    """Render the credential gate or the active tab"""
    template = "api_key_gate.html" if dashboard.show_api_key_input else "dashboard.html"
    return templates.TemplateResponse(
        request,
        template,
        {
            "dashboard": dashboard,
            "selected_count": len(dashboard.selected_videos),
            "dangling": set(dashboard.dangling_automations()),
        },
    )


@router.get("/dashboard/state", response_model=DashboardSnapshot, response_model_exclude_none=True)
async def dashboard_state(dashboard: CurrentDashboard):
    """JSON snapshot of the dashboard state (the credential is never included)"""
    return dashboard.snapshot()


@router.post("/settings/api-key")
async def save_api_key(dashboard: CurrentDashboard, api_key: Annotated[str, Form()] = ""):
    dashboard.save_api_key(api_key)
    return _back_to_dashboard()


@router.post("/settings/demo")
async def use_demo_mode(dashboard: CurrentDashboard):
    dashboard.use_demo_mode()
    return _back_to_dashboard()


@router.post("/settings/open")
async def open_api_settings(dashboard: CurrentDashboard):
    dashboard.open_api_settings()
    return _back_to_dashboard()


@router.post("/tabs/{tab}")
async def set_active_tab(tab: Tab, dashboard: CurrentDashboard):
    dashboard.set_active_tab(tab)
    return _back_to_dashboard()


@router.post("/search")
async def search(dashboard: CurrentDashboard, q: Annotated[str, Form()] = ""):
    dashboard.search_query = q
    await dashboard.search_videos()
    return _back_to_dashboard()


@router.post("/videos/{video_id}/toggle")
async def toggle_video_selection(video_id: str, dashboard: CurrentDashboard):
    dashboard.toggle_video_selection(video_id)
    return _back_to_dashboard()


@router.post("/playlists")
async def create_playlist(dashboard: CurrentDashboard, name: Annotated[str, Form()] = ""):
    dashboard.create_playlist(name)
    return _back_to_dashboard()


@router.post("/playlists/{playlist_id}/add-selected")
async def add_selected_to_playlist(playlist_id: str, dashboard: CurrentDashboard):
    dashboard.add_videos_to_playlist(playlist_id)
    return _back_to_dashboard()


@router.post("/playlists/{playlist_id}/delete")
async def delete_playlist(playlist_id: str, dashboard: CurrentDashboard):
    dashboard.delete_playlist(playlist_id)
    return _back_to_dashboard()


@router.post("/automations")
async def add_automation(dashboard: CurrentDashboard, q: Annotated[str, Form()] = ""):
    dashboard.search_query = q
    dashboard.add_automation()
    return _back_to_dashboard()


@router.post("/automations/{automation_id}/toggle")
async def toggle_automation(automation_id: str, dashboard: CurrentDashboard):
    dashboard.toggle_automation(automation_id)
    return _back_to_dashboard()


@router.post("/automations/{automation_id}/delete")
async def delete_automation(automation_id: str, dashboard: CurrentDashboard):
    dashboard.delete_automation(automation_id)
    return _back_to_dashboard()
