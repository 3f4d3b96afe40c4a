"""
Assets de la vitrine (index.html, store.css, js/store.js) servis depuis PUBLIC_DIR.
/static reste un alias de /public.
"""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from backend.config import PUBLIC_DIR

STATIC_MOUNTS = ("public", "static")

def mount_static_files(app: FastAPI) -> None:
    for name in STATIC_MOUNTS:
        app.mount(f"/{name}", StaticFiles(directory=str(PUBLIC_DIR)), name=name)
