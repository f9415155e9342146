"""
Registre central des routers (API v1, health).
"""
from fastapi import FastAPI
from rewear.auth.views import api_router as auth_api_router
from rewear.products import views as products_views
from rewear.favorites import views as favorites_views
from rewear.cart import views as cart_views
from rewear.messages import views as messages_views
from rewear.profiles import views as profiles_views
from rewear.payments import views as payments_views
from rewear.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    # API v1
    app.include_router(auth_api_router)
    app.include_router(products_views.router)
    app.include_router(favorites_views.router)
    app.include_router(cart_views.router)
    app.include_router(messages_views.router)
    app.include_router(messages_views.chat_router)
    app.include_router(profiles_views.router)
    app.include_router(payments_views.router)
    # Health & monitoring
    app.include_router(health_router)
