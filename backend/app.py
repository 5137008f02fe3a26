from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import logging
import os

import httpx
from dotenv import load_dotenv

from tools.llm_logger import get_llm_logger
from tools.prompts import build_prompt

load_dotenv()
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_API_BASE = os.environ.get(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
)
UPSTREAM_TIMEOUT = float(os.environ.get("UPSTREAM_TIMEOUT", "60"))
PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

app = FastAPI(title="Word Flashcards API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger = logging.getLogger(__name__)


class MeaningRequest(BaseModel):
    word: str
    detailed: bool = False


def gemini_url(model: str = None) -> str:
    return f"{GEMINI_API_BASE}/models/{model or GEMINI_MODEL}:generateContent"


def upstream_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT)


@app.get("/health")
async def health():
    return {"ok": True}


@app.api_route("/api/gemini-proxy", methods=PROXY_METHODS)
async def gemini_proxy(request: Request):
    """英単語の意味を Gemini に問い合わせるプロキシ"""
    if request.method != "POST":
        return JSONResponse(
            status_code=405, content={"error": "Method not allowed. Use POST."}
        )

    try:
        api_key = os.environ.get("GEMINI_API_KEY")
        if not api_key:
            return JSONResponse(
                status_code=500, content={"error": "API key not configured"}
            )

        body = MeaningRequest.model_validate(await request.json())
        prompt_text = build_prompt(body.word, detailed=body.detailed)
        logger.info(f"📨 Meaning request: {body.word!r} (detailed={body.detailed})")
        metadata = {"word": body.word, "detailed": body.detailed}

        llm_logger = get_llm_logger()
        try:
            async with upstream_client() as client:
                response = await client.post(
                    gemini_url(),
                    params={"key": api_key},
                    headers={"Content-Type": "application/json"},
                    json={"contents": [{"parts": [{"text": prompt_text}]}]},
                )
        except httpx.HTTPError as e:
            llm_logger.log_llm_call(
                prompt=prompt_text,
                response=str(e),
                model=GEMINI_MODEL,
                module="backend.app",
                status=None,
                metadata={**metadata, "error": type(e).__name__},
            )
            raise

        if not response.is_success:
            error_data = response.text
            logger.warning(f"Upstream returned {response.status_code}")
            llm_logger.log_llm_call(
                prompt=prompt_text,
                response=error_data,
                model=GEMINI_MODEL,
                module="backend.app",
                status=response.status_code,
                metadata=metadata,
            )
            return JSONResponse(
                status_code=response.status_code,
                content={
                    "error": f"API Error: {response.status_code}",
                    "details": error_data,
                },
            )

        data = response.json()
        llm_logger.log_llm_call(
            prompt=prompt_text,
            response=data,
            model=GEMINI_MODEL,
            module="backend.app",
            status=response.status_code,
            metadata=metadata,
        )
        return JSONResponse(status_code=200, content=data)
    except Exception as e:
        logger.exception("Proxy error")
        return JSONResponse(status_code=500, content={"error": str(e)})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
