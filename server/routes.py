import asyncio
import json
import logging
from typing import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, StreamingResponse
from pydantic import BaseModel

import config
from db.models import Word
from server.views import hello_greeting, render_hello_content, render_page, render_word_content
from viewmodel.hello_viewmodel import HelloViewModel
from viewmodel.live_data import LiveData
from viewmodel.word_viewmodel import WordViewModel

logger = logging.getLogger(__name__)


class InsertWordRequest(BaseModel):
    word: str


class UpdateNameRequest(BaseModel):
    name: str


def _words_payload(words: list[Word]) -> dict:
    return {"words": [w.word for w in words]}


async def word_events(live_data: LiveData[list[Word]],
                      is_disconnected: Callable[[], Awaitable[bool]],
                      heartbeat_secs: float = config.SSE_HEARTBEAT_SECS) -> AsyncIterator[str]:
    """SSE frames for every snapshot of ``live_data``, current one first."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    # Called from whichever thread committed the change
    def on_change(words: list[Word]):
        try:
            loop.call_soon_threadsafe(queue.put_nowait, _words_payload(words))
        except RuntimeError:
            # loop already closed, the finally below drops this observer
            logger.debug("Snapshot descartado, el cliente SSE ya cerro")

    live_data.observe(on_change)
    logger.info("Cliente SSE conectado")
    try:
        while True:
            try:
                payload = await asyncio.wait_for(queue.get(), timeout=heartbeat_secs)
                yield f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"
            except asyncio.TimeoutError:
                yield ": heartbeat\n\n"
            if await is_disconnected():
                break
    finally:
        live_data.remove_observer(on_change)
        logger.info("Cliente SSE desconectado")


def create_router(word_view_model: WordViewModel, hello_view_model: HelloViewModel) -> APIRouter:
    router = APIRouter()

    # -- Words --

    @router.get("/words")
    def list_words():
        return _words_payload(word_view_model.all_words.value)

    @router.post("/words", status_code=202)
    def insert_word(body: InsertWordRequest):
        try:
            word_view_model.insert(Word(body.word))
        except ValueError as e:
            raise HTTPException(400, str(e))
        except RuntimeError as e:
            raise HTTPException(503, str(e))
        return {"status": "queued"}

    @router.get("/words/stream")
    async def stream_words(request: Request):
        headers = {
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        }
        return StreamingResponse(
            word_events(word_view_model.all_words, request.is_disconnected),
            media_type="text/event-stream",
            headers=headers,
        )

    # -- Hello (deprecated sample) --

    @router.get("/hello")
    def get_hello():
        name = hello_view_model.name.value
        return {"name": name, "greeting": hello_greeting(name)}

    @router.put("/hello")
    def update_hello(body: UpdateNameRequest):
        hello_view_model.on_name_change(body.name)
        return get_hello()

    return router


def create_screen_router(word_view_model: WordViewModel, hello_view_model: HelloViewModel) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_class=HTMLResponse)
    def word_screen():
        body = render_word_content(word_view_model.all_words.value)
        return render_page("Lista de palabras", body)

    @router.get("/hello", response_class=HTMLResponse)
    def hello_screen():
        body = render_hello_content(hello_view_model.name.value)
        return render_page("Hello", body)

    return router
