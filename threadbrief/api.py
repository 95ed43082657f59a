"""threadbrief HTTP API — FastAPI endpoint for the web front end.

Usage:
    uvicorn threadbrief.api:app --port 8080
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

app = FastAPI(title="threadbrief", version="0.1.0")


class SummarizeRequest(BaseModel):
    url: str


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/summarize")
async def summarize_endpoint(req: SummarizeRequest):
    from .service import summarize_thread

    digest = await summarize_thread(req.url)
    status_code = 500 if digest.error else 200
    return JSONResponse(digest.to_response(), status_code=status_code)
