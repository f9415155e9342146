"""
Routes de pages: /, /dashboard, /checkout servent public/index.html (application monopage)
s'il existe, sinon un descripteur JSON. Tout autre chemin inconnu répond 404 (voir exceptions.py).
"""
from fastapi import FastAPI
from fastapi.responses import FileResponse, JSONResponse, Response
from starlette.status import HTTP_204_NO_CONTENT
from rewear.config import PUBLIC_DIR

PAGES = ("/", "/dashboard", "/checkout")

def _page(path: str):
    index_path = PUBLIC_DIR / "index.html"
    if index_path.exists():
        return FileResponse(str(index_path))
    return JSONResponse({"app": "ReWear", "page": path, "api": "/docs"})

def register_routes(app: FastAPI) -> None:
    @app.get("/", include_in_schema=False)
    def home():
        return _page("/")

    @app.get("/dashboard", include_in_schema=False)
    def dashboard():
        return _page("/dashboard")

    @app.get("/checkout", include_in_schema=False)
    def checkout():
        return _page("/checkout")

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
