from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agent.core.errors import DispatchError
from agent.dispatcher import dispatch
from config.settings import get_settings


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("proposal_assistant")

app = FastAPI(title="DBT Proposal Assistant", version="1.0.0")

# CORS: allow local frontend during development
if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.post("/api/chat")
async def chat(request: Request):
    try:
        body = await request.json()
        if not isinstance(body, dict):
            body = {}

        messages = body.get("messages")
        logger.info(
            "Incoming chat: history_turns=%s",
            len(messages) if isinstance(messages, list) else "n/a",
        )
        message = dispatch(messages)
        logger.info("Responded with %s chars", len(message))
        return {"message": message}
    except DispatchError as exc:
        logger.warning("Rejected chat request: %s", exc)
        return _error(400, exc.detail)
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        return _error(500, "Internal server error")


@app.get("/api/chat")
def chat_health() -> Dict[str, Any]:
    return {"status": "ok"}


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok"}


def main() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
