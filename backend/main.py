"""ASGI entrypoint: ``uvicorn main:app``."""

from app import create_app
from core import settings

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
