from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from rsvpbot.config import settings
from rsvpbot.routers import conversation
import json, logging
from typing import Any

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

class UTF8JSONResponse(JSONResponse):
    """Menu labels and collected names go out unescaped (e.g. "José", not "Jos\\u00e9")."""
    media_type = "application/json; charset=utf-8"
    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

app = FastAPI(title="RSVP Bot API", version="1.0.0", default_response_class=UTF8JSONResponse)

# chat front-ends call the API from the browser; credentials only with an explicit origin list
app.add_middleware(
    CORSMiddleware, allow_origins=settings.cors_origins, allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "DELETE"], allow_headers=["*"],
)

app.include_router(conversation.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "store": settings.store_backend, "culture": settings.culture, "version": "1.0.0"}
