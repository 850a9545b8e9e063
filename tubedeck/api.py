from fastapi import FastAPI
from tubedeck.youtube.controller import router as youtube_router
from tubedeck.dashboard.controller import router as dashboard_router

def register_routes(app: FastAPI):
    app.include_router(youtube_router)
    app.include_router(dashboard_router)
