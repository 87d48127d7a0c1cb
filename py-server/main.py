"""Paint Swatch Python Server"""

import asyncio
import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from rich.console import Console
from rich.logging import RichHandler

from engine.config import EngineConfig
from engine.paint_engine import PaintEngine
from models.swatch_types import SwatchRequest
from utils.endpoint_decorators import handle_paint_errors
from utils.pdf_transforms import AffineTransform

API_VERSION = "1.0.0"
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

logger = logging.getLogger("rich")

# Get levels from env, default to INFO
SERVER_CONFIG = EngineConfig(
    log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    enable_debug_logging=os.getenv("DEBUG_LOGGING", "") == "1",
)

app = FastAPI(
    title="Paint Swatch API",
    description="Render canvas paints as PDF swatches",
    version=API_VERSION
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "message": "Paint Swatch API",
        "version": API_VERSION,
        "features": [
            "Solid colors with alpha",
            "Linear, radial and two-stop gradients",
            "Raster texture patterns",
            "Vector tiling patterns",
            "Porter-Duff composites mapped to PDF blend modes",
            "Deduplicated graphics states and shadings"
        ]
    }


@app.get("/health")
async def health_check():
    """Health check with dependency verification"""
    try:
        import PIL
        import pikepdf
        import numpy

        return {
            "status": "healthy",
            "version": API_VERSION,
            "features": {
                "pdf_output": "pikepdf",
                "image_encoding": "Pillow",
                "transforms": "numpy"
            },
            "dependencies": {
                "PIL": PIL.__version__,
                "pikepdf": pikepdf.__version__,
                "numpy": numpy.__version__
            }
        }
    except ImportError as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": f"Missing dependency: {str(e)}"
            }
        )


def render_swatch(request: SwatchRequest, config: EngineConfig = None) -> bytes:
    """Render one swatch request to a single-page PDF."""
    paint = request.paint.to_paint()
    composite = request.composite.to_composite() if request.composite else None
    transform = AffineTransform.from_ctm(request.transform) if request.transform else None

    with PaintEngine(config=config) as engine:
        page = engine.new_page(request.pageSize)
        env = engine.create_environment()
        engine.fill_rect(env, request.target_rect(), paint, composite, transform)
        engine.commit(page, env)
        pdf_bytes = engine.to_bytes()
        stats = engine.get_stats()

    logger.info(
        f"Rendered {request.paint.type} swatch: {len(pdf_bytes)} bytes, "
        f"{stats.get('ext_gstates', 0)} graphics states, {stats.get('shadings', 0)} shadings"
    )
    return pdf_bytes


@app.post("/render-swatch")
@handle_paint_errors
async def render_swatch_endpoint(request: SwatchRequest):
    """Render a paint into a rectangle on a new page and return the PDF"""
    logger.info(f"Render swatch request: paint={request.paint.type}, page={request.pageSize}")
    pdf_bytes = await asyncio.to_thread(render_swatch, request, SERVER_CONFIG)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'inline; filename="swatch.pdf"'}
    )


def _configure_server_logging(config: EngineConfig):
    """Configure logging with Rich handler and filters for clean output"""
    console = Console(force_terminal=True)
    log_level = config.effective_log_level()

    class ShutdownFilter(logging.Filter):
        """Filter out shutdown-related log messages"""
        def filter(self, record):
            if record.exc_info and record.exc_info[0] in (KeyboardInterrupt, asyncio.CancelledError):
                return False
            if "CancelledError" in str(record.msg) or "KeyboardInterrupt" in str(record.msg):
                return False
            return True

    rich_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=True
    )
    rich_handler.addFilter(ShutdownFilter())

    # Silence everything by default
    logging.basicConfig(level=logging.WARNING, format="%(message)s", handlers=[rich_handler])

    # Allow server startup logs
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)

    # Set specific module log levels
    for module_name in ["main", "rich", "engine", "processors", "utils"]:
        logging.getLogger(module_name).setLevel(log_level)

    return console


server_console = _configure_server_logging(SERVER_CONFIG)

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    server_console.print(f"[bold green]Starting server on http://localhost:{port}[/bold green]")

    try:
        uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True, log_config=None)
    except KeyboardInterrupt:
        server_console.print("\n[bold yellow]Server stopped.[/bold yellow]")
