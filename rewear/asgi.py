"""
ASGI entrypoint: expose `app` pour les process managers (ex: `uvicorn rewear.asgi:app`).
"""
from rewear.app_setup.factory import create_app

app = create_app()
