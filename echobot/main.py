"""
EchoBot Chat Service
Handles: POST /chat, answering every message with a fixed templated reply
Port: 8888 (ECHOBOT_PORT)

The route reads the raw body instead of declaring a pydantic body model so
that bad input comes back as 400 {"error": ...} rather than FastAPI's 422.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from echobot import bot
from echobot.config import HOST, LOG_LEVEL, PORT, SERVICE_NAME
from echobot.logging_config import setup_logging
from echobot.models import HealthResponse

setup_logging(LOG_LEVEL)

JSON_MEDIA_TYPE = "application/json"
# CORSMiddleware only answers requests that send an Origin header
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(title="EchoBot Chat Service", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Endpoints ─────────────────────────────────────────────────────────────────

@app.post("/chat")
async def chat(request: Request):
    try:
        raw = await request.body()
    except Exception as e:
        status_code, body = bot.respond(bot.Fault(reason=e))
    else:
        status_code, body = bot.handle_raw(raw, request.headers.get("content-type"))

    try:
        content = bot.to_json(body)
    except Exception as e:
        status_code, body = bot.respond(bot.Fault(reason=e))
        content = bot.to_json(body)
    return Response(content=content, status_code=status_code, media_type=JSON_MEDIA_TYPE, headers=CORS_HEADERS)


@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok", "service": SERVICE_NAME}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("echobot.main:app", host=HOST, port=PORT, reload=True)
