from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from sfxcue.cues import cues_to_payload
from sfxcue.env import configure_logging, load_dotenv_if_present
from sfxcue.pipeline import SfxCuePipeline
from sfxcue.synth import to_data_url
from .dependencies import (
    GenerateSfxRequest,
    GenerateSoundRequest,
    MapPositionsRequest,
    TranscribeRequest,
    cues_from_payload,
    get_pipeline,
    transcript_to_payload,
    words_from_payload,
)

logger = logging.getLogger(__name__)


def _error_response(exc: Exception) -> JSONResponse:
    # 外部服务失败统一以 JSON 错误返回
    logger.error("Request failed: %s", exc)
    return JSONResponse({"error": str(exc)}, status_code=500)


def create_app() -> FastAPI:
    """
    创建并配置 FastAPI 应用。

    - 加载 .env 环境变量；
    - 挂载模板与静态资源目录；
    - 注册页面与 API 路由。
    """
    load_dotenv_if_present()

    app = FastAPI(
        title="sfxcue Web",
        description="Web UI for sfxcue: 转录音频并为播客生成带时间戳的音效提示。",
    )

    base_dir = Path(__file__).resolve().parent
    templates = Jinja2Templates(directory=str(base_dir / "templates"))

    static_dir = base_dir / "static"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    @app.get("/health", response_class=JSONResponse)
    async def health() -> dict[str, str]:
        """
        简单健康检查，用于部署与监控。
        """
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"title": "sfxcue Web"},
        )

    @app.post("/api/transcribe", response_class=JSONResponse)
    def transcribe_api(
        body: TranscribeRequest,
        pipeline: SfxCuePipeline = Depends(get_pipeline),
    ) -> JSONResponse:
        """
        下载音频并转录，返回全文与词级时间戳。
        """
        audio_url = body.audio_url.strip()
        if not audio_url:
            raise HTTPException(status_code=400, detail="audio_url is required.")
        try:
            transcript = pipeline.run_transcription(audio_url)
        except Exception as exc:
            return _error_response(exc)
        return JSONResponse(transcript_to_payload(transcript))

    @app.post("/api/generate-sfx", response_class=JSONResponse)
    def generate_sfx_api(
        body: GenerateSfxRequest,
        pipeline: SfxCuePipeline = Depends(get_pipeline),
    ) -> JSONResponse:
        if not body.transcription.strip():
            raise HTTPException(
                status_code=400,
                detail="Transcription is required in the request body.",
            )
        try:
            cues = pipeline.cue_generator.generate(body.transcription)
        except Exception as exc:
            return _error_response(exc)
        return JSONResponse({"sfx_list": cues_to_payload(cues)})

    @app.post("/api/map-positions", response_class=JSONResponse)
    def map_positions_api(
        body: MapPositionsRequest,
        pipeline: SfxCuePipeline = Depends(get_pipeline),
    ) -> JSONResponse:
        """
        将每条音效提示的 position 映射到转录时间戳；未找到时 timestamp 为 null。
        """
        cues = pipeline.run_mapping(
            cues_from_payload(body.sfx_list),
            words_from_payload(body.words),
        )
        unmatched = sum(1 for cue in cues if cue.timestamp is None)
        return JSONResponse({"sfx_list": cues_to_payload(cues), "unmatched_count": unmatched})

    @app.post("/api/generate-sound", response_class=JSONResponse)
    def generate_sound_api(
        body: GenerateSoundRequest,
        pipeline: SfxCuePipeline = Depends(get_pipeline),
    ) -> JSONResponse:
        if not body.text.strip():
            raise HTTPException(status_code=400, detail="Text is required.")
        try:
            audio = pipeline.synthesizer.generate(body.text, duration=body.duration)
        except Exception as exc:
            return _error_response(exc)
        return JSONResponse({"audio_base64": to_data_url(audio)})

    return app


# 供 uvicorn 等 ASGI 服务器直接引用
app = create_app()


def main() -> None:
    """
    本地启动 Web 服务的入口。

    可通过环境变量控制监听地址与端口：
      - SFXCUE_WEB_HOST（默认 127.0.0.1）
      - SFXCUE_WEB_PORT（默认 8000）
    """
    import uvicorn

    configure_logging(os.getenv("SFXCUE_LOG_LEVEL", "INFO"))
    host = os.getenv("SFXCUE_WEB_HOST", "127.0.0.1")
    port_str = os.getenv("SFXCUE_WEB_PORT", "8000")
    try:
        port = int(port_str)
    except ValueError:
        port = 8000

    logger.info("Starting sfxcue Web on %s:%d", host, port)
    uvicorn.run("sfxcue.web.app:app", host=host, port=port, reload=False)
