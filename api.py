from datetime import datetime
from typing import List, Dict

from fastapi import FastAPI, HTTPException, Header, Depends
from pydantic import BaseModel, Field

from book import Book
from config import settings
from library import Library, Outcome, OutcomeKind
from user import Role, User


library = Library()

# API üzerinden oluşturulan kitaplar, kimlikleri (book_id) ile tutulur.
# Katalogdan silinen bir kitap, ödünçte olduğu sürece burada kalır; üye hâlâ iade edebilir.
books_by_id: Dict[str, Book] = {}

app = FastAPI(title=settings.app_name, version=settings.app_version)

OUTCOME_STATUS = {
    OutcomeKind.SUCCESS: 200,
    OutcomeKind.NOT_AUTHORIZED: 403,
    OutcomeKind.ALREADY_BORROWING: 409,
    OutcomeKind.NOT_BORROWED: 409,
    OutcomeKind.NOT_FOUND: 404,
}

# --- Modeller ---
class BookModel(BaseModel):
    book_id: str
    title: str
    author: str
    published_date: datetime

class BookCreateModel(BaseModel):
    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    published_date: datetime | None = Field(default=None, description="Boş bırakılırsa şimdiki zaman")

class OutcomeModel(BaseModel):
    ok: bool
    kind: str
    operation: str
    actor: str
    book: str
    message: str

class StatsModel(BaseModel):
    total_books: int
    unique_authors: int
    active_loans: int

# --- Kimlik ---
def get_actor(
    x_actor_name: str = Header(..., min_length=1),
    x_actor_role: str = Header(...),
    x_actor_age: int = Header(0),
) -> User:
    """İşlemi yapan kişiyi başlıklardan oluşturan bağımlılık."""
    try:
        role = Role(x_actor_role.strip().upper())
    except ValueError:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown role: {x_actor_role}. Use LIBRARIAN or MEMBER.",
        )
    return User(name=x_actor_name, age=x_actor_age, role=role)

# --- Yardımcı Fonksiyonlar ---
def _lookup_book(book_id: str) -> Book:
    book = books_by_id.get(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found.")
    return book

def _release_if_unused(book: Book) -> None:
    """Katalogda olmayan ve kimsede ödünçte olmayan kitabın kimliğini bırak."""
    in_catalog = any(b.book_id == book.book_id for b in library.get_books())
    on_loan = any(b.book_id == book.book_id for b in library.get_loans().values())
    if not in_catalog and not on_loan:
        books_by_id.pop(book.book_id, None)

def _outcome_response(outcome: Outcome) -> OutcomeModel:
    """Başarısız sonuçları HTTP hatasına çevir, başarılıyı olduğu gibi döndür."""
    if not outcome.ok:
        raise HTTPException(status_code=OUTCOME_STATUS[outcome.kind], detail=outcome.to_dict())
    return OutcomeModel(**outcome.to_dict())

# --- Sağlık Kontrolü ---
@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "total_books": library.get_statistics()["total_books"],
        "version": settings.app_version,
        "environment": settings.environment,
    }

# --- Katalog ---
@app.get("/books", response_model=List[BookModel])
async def list_books():
    """Kataloğun anlık görüntüsünü ekleme sırasıyla döndür."""
    return [BookModel(**book.to_dict()) for book in library.get_books()]

@app.post("/books", response_model=BookModel)
async def add_book(payload: BookCreateModel, actor: User = Depends(get_actor)):
    """Yeni bir kitap oluştur ve kataloğa ekle (yalnızca kütüphaneci)."""
    book = Book.from_dict(payload.model_dump())
    _outcome_response(library.add_book(actor, book))
    books_by_id[book.book_id] = book
    return BookModel(**book.to_dict())

@app.delete("/books/{book_id}", response_model=OutcomeModel)
async def delete_book(book_id: str, actor: User = Depends(get_actor)):
    """Kitabı katalogdan kaldır (yalnızca kütüphaneci)."""
    book = _lookup_book(book_id)
    response = _outcome_response(library.remove_book(actor, book))
    _release_if_unused(book)
    return response

# --- Ödünç ---
@app.post("/books/{book_id}/rent", response_model=OutcomeModel)
async def rent_book(book_id: str, actor: User = Depends(get_actor)):
    book = _lookup_book(book_id)
    return _outcome_response(library.rent_book(actor, book))

@app.post("/books/{book_id}/return", response_model=OutcomeModel)
async def return_book(book_id: str, actor: User = Depends(get_actor)):
    book = _lookup_book(book_id)
    response = _outcome_response(library.return_book(actor, book))
    _release_if_unused(book)
    return response

@app.get("/loans", response_model=Dict[str, BookModel])
async def list_loans(actor: User = Depends(get_actor)):
    """Üye adı -> ödünç alınan kitap.

    Kütüphaneci tüm defteri görür, üye yalnızca kendi kaydını.
    """
    loans = library.get_loans()
    if actor.get_role() is not Role.LIBRARIAN:
        loans = {name: book for name, book in loans.items() if name == actor.name}
    return {name: BookModel(**book.to_dict()) for name, book in loans.items()}

@app.get("/stats", response_model=StatsModel)
async def get_stats():
    return StatsModel(**library.get_statistics())
