from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

import config
from server.routes import create_router, create_screen_router


def create_app(word_view_model, hello_view_model) -> FastAPI:
    app = FastAPI(title="Wordlist", version="0.1.0")

    router = create_router(word_view_model, hello_view_model)
    app.include_router(router, prefix="/api")
    app.include_router(create_screen_router(word_view_model, hello_view_model))

    app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")

    return app
