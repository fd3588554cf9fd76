import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from pydantic import BaseModel

from config import settings
from exceptions import LibraryError, NotFoundError
from library import Library, read_seed_file

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: every server run (and every TestClient context) gets a fresh store
    library = Library()
    if settings.seed_file:
        loaded = library.load_books(read_seed_file(settings.seed_file))
        logger.info(f"Loaded {loaded} books from {settings.seed_file}")
    app.state.library = library
    try:
        yield
    finally:
        # Shutdown: the store only lives as long as the process
        library.clear()

# No trailing-slash redirects: "/books/" is a request with an empty id
app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug, lifespan=lifespan, redirect_slashes=False)


def get_library(request: Request) -> Library:
    """Dependency returning the store owned by the running app."""
    return request.app.state.library

LibraryDep = Annotated[Library, Depends(get_library)]


# --- Error handling ---
# Every rejected request answers 400 with an empty body, whatever the cause.
@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    logger.warning(f"{request.method} {request.url.path} rejected ({type(exc).__name__}): {exc}")
    return Response(status_code=400)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path} rejected (invalid body): {exc.errors()}")
    return Response(status_code=400)


# --- Models ---
class HealthModel(BaseModel):
    status: str
    total_books: int
    version: str


# --- Health check ---
@app.get("/health", response_model=HealthModel)
def health(library: LibraryDep):
    return HealthModel(status="healthy", total_books=library.count(), version=settings.app_version)


# --- Book endpoints ---
@app.get("/books")
def list_books(library: LibraryDep) -> List[Dict[str, Any]]:
    """List all books, sorted by id."""
    return [b.to_dict() for b in library.list_books()]

@app.api_route("/books/", methods=["GET", "PUT", "DELETE"])
def missing_book_id():
    raise NotFoundError("")

@app.get("/books/{book_id}")
def get_book(book_id: str, library: LibraryDep) -> Dict[str, Any]:
    return library.get_book(book_id).to_dict()

@app.post("/books", status_code=201)
def add_book(library: LibraryDep, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Create a book. The body must carry an id that is not taken yet."""
    return library.add_book(payload).to_dict()

@app.put("/books/{book_id}")
def update_book(book_id: str, library: LibraryDep, update: Optional[Dict[str, Any]] = Body(default=None)) -> Dict[str, Any]:
    """Merge the given fields into a book. The id itself cannot be changed."""
    return library.update_book(book_id, update).to_dict()

@app.delete("/books/{book_id}")
def delete_book(book_id: str, library: LibraryDep):
    library.remove_book(book_id)
    return Response(status_code=200)
