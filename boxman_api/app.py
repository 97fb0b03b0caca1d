# boxman_api/app.py
import logging
import os

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from .config import load_cfg, setup_logging

# -----------------------------
# Yol/konfig
# -----------------------------
cfg = load_cfg()
setup_logging()
logger = logging.getLogger(__name__)

# -----------------------------
# FastAPI uygulaması
# -----------------------------
app = FastAPI(title="Boxman")

# -----------------------------
# Aktif systemd servisleri router
from .services import router as services_router
app.include_router(services_router)

# -----------------------------
# Unit dosyası üretimi router
from .unit_file import router as unit_file_router
app.include_router(unit_file_router)


@app.get("/", response_class=PlainTextResponse)
def index():
    return "Hello, World!"


@app.get("/health")
def liveness():
    return {"status": "up"}


def main() -> None:
    """
    Sunucu entrypoint: uvicorn ile BOXMAN_HOST:BOXMAN_PORT üzerinde çalışır.
    """
    import uvicorn

    host = os.getenv("BOXMAN_HOST", "0.0.0.0")
    port = int(os.getenv("BOXMAN_PORT", "1323"))
    logger.info("Boxman %s:%d üzerinde başlıyor (systemctl=%s)", host, port, cfg["systemctl_bin"])
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
