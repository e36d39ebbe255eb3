"""FastAPI web server streaming live GPS positions.

Start with::

    NAVLINK_PORT=/dev/ttyUSB0 uvicorn server.main:app --host 0.0.0.0 --port 8000

WebSocket clients connect to ``ws://<host>:8000/ws`` and receive a stream
of JSON messages: one ``type="position"`` message per decoded NMEA sentence
and a ``type="error"`` message if the serial receiver fails.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from server.broadcaster import add_subscriber, remove_subscriber
from server.receiver import create_interpreter, load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_QUEUE_MAX_SIZE = 10
_TIMEOUT_SECONDS = 5.0


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    loop = asyncio.get_running_loop()
    interpreter = create_interpreter(load_settings(), loop)
    interpreter.start()
    application.state.interpreter = interpreter
    try:
        yield
    finally:
        # stop() joins the reader threads; keep it off the event loop.
        await loop.run_in_executor(None, interpreter.stop)


app = FastAPI(lifespan=_lifespan)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream position JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages).
    The oldest message is dropped when the queue is full so slow clients do
    not stall the receiver. The connection is closed with code 1001 if no
    message arrives within ``_TIMEOUT_SECONDS``; the client should reconnect.

    Args:
        websocket: The incoming WebSocket connection.
    """
    await websocket.accept()
    queue: asyncio.Queue[str] = asyncio.Queue(maxsize=_QUEUE_MAX_SIZE)
    add_subscriber(queue)
    logger.info("WebSocket client connected")
    try:
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        remove_subscriber(queue)
        logger.info("WebSocket client disconnected")
