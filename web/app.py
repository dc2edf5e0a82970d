"""
FastAPI app serving the portfolio page.

One route: GET / returns a fixed index.html. The game itself runs in
the desktop shell; the server keeps no game state.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

logger = logging.getLogger(__name__)

# Bundled page, overridable with TICTACTOE_INDEX_HTML
DEFAULT_INDEX_HTML = Path(__file__).parent / "static" / "index.html"
INDEX_HTML_ENV = "TICTACTOE_INDEX_HTML"


def resolve_index_path(index_path: Optional[Union[str, Path]] = None) -> Path:
    if index_path is None:
        index_path = os.environ.get(INDEX_HTML_ENV) or DEFAULT_INDEX_HTML
    return Path(index_path).expanduser().resolve()


def create_app(index_path: Optional[Union[str, Path]] = None) -> FastAPI:
    """
    Build the app.

    Args:
        index_path: HTML document served at "/". Defaults to the
            environment override, then the bundled page.
    """
    page = resolve_index_path(index_path)
    app = FastAPI(title="TicTacToe Portfolio", version="1.0.0", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/", include_in_schema=False)
    def serve_root() -> FileResponse:
        """Serve the portfolio page."""
        if not page.is_file():
            logger.error("Index page not found: %s", page)
            raise HTTPException(status_code=404, detail="index.html not found")
        return FileResponse(page, media_type="text/html")

    logger.debug("Serving %s at /", page)
    return app


app = create_app()
