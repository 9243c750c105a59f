# core/sa/repositories/book.py
from typing import Optional, List
from sqlalchemy import desc, delete, func, select
from sqlalchemy.orm import Session, joinedload, selectinload
from core.exceptions import NotFoundError, StorageError
from core.models.book import BookInput
from ..models import Book, BookAuthor, BookGenre, BookTopic, ReadingStatus

LINK_FIELDS = {'author_ids', 'genre_ids', 'topic_ids'}

class BookRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, book_id: str) -> Optional[Book]:
        """Get a book by ID with all relationships loaded.

        Args:
            book_id: The id of the book

        Returns:
            Book object with loaded relationships (publisher, series, category, authors, genres, topics)
            or None if not found
        """
        return (
            self.session.query(Book)
            .filter(Book.id == book_id)
            .options(
                joinedload(Book.publisher),
                joinedload(Book.series),
                joinedload(Book.category),
                selectinload(Book.authors),
                selectinload(Book.genres),
                selectinload(Book.topics)
            )
            .first()
        )

    def get_all(self) -> List[Book]:
        """Get every book with its author, genre and topic links loaded"""
        return (
            self.session.query(Book)
            .options(
                selectinload(Book.authors),
                selectinload(Book.genres),
                selectinload(Book.topics)
            )
            .order_by(Book.title, Book.id)
            .all()
        )

    def search_books(
        self,
        query: Optional[str] = None,
        reading_status: Optional[ReadingStatus] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[Book]:
        """Search books by title or ISBN.

        Args:
            query: Search query string
            reading_status: Only return books with this reading status
            limit: Maximum number of results to return
            offset: Number of records to skip

        Returns:
            List of Book objects ordered by title
        """
        base_query = self.session.query(Book).options(selectinload(Book.authors))

        if query and query.strip():
            base_query = base_query.filter(
                Book.title.ilike(f"%{query}%") | Book.isbn.ilike(f"%{query}%")
            )

        if reading_status:
            base_query = base_query.filter(Book.reading_status == ReadingStatus(reading_status).value)

        return base_query.order_by(Book.title).offset(offset).limit(limit).all()

    def count(self) -> int:
        return self.session.query(func.count(Book.id)).scalar()

    def count_by_reading_status(self) -> dict:
        """Number of books per reading status, with every status present"""
        counts = {status.value: 0 for status in ReadingStatus}
        rows = (
            self.session.query(Book.reading_status, func.count(Book.id))
            .group_by(Book.reading_status)
            .all()
        )
        for status, total in rows:
            counts[status] = total
        return counts

    def get_recent_books(self, limit: int = 5) -> List[Book]:
        """Get recently added books"""
        return self.session.query(Book).order_by(
            desc(Book.created_at), Book.title
        ).limit(limit).all()

    def get_recommended_books(self, limit: int = 5) -> List[Book]:
        """Unread books from the genres of the most completed books.

        Falls back to the most recently added unread books when nothing has
        been completed yet.
        """
        favorite_genres = (
            self.session.query(BookGenre.genre_id)
            .join(Book, Book.id == BookGenre.book_id)
            .filter(Book.reading_status == ReadingStatus.COMPLETED.value)
            .group_by(BookGenre.genre_id)
            .order_by(func.count().desc())
            .limit(3)
            .all()
        )
        query = self.session.query(Book).filter(Book.reading_status == ReadingStatus.UNREAD.value)
        if favorite_genres:
            genre_ids = [genre_id for (genre_id,) in favorite_genres]
            query = query.filter(
                Book.id.in_(
                    select(BookGenre.book_id).where(BookGenre.genre_id.in_(genre_ids))
                )
            )
        return query.order_by(desc(Book.created_at), Book.title).limit(limit).all()

    def get_author_ids(self, book_id: str) -> List[str]:
        """Ids of the authors linked to a book.

        Raises:
            StorageError: if the link table lists the same author twice for the book
        """
        author_ids = [
            author_id for (author_id,) in
            self.session.query(BookAuthor.author_id).filter(BookAuthor.book_id == book_id)
        ]
        if len(author_ids) != len(set(author_ids)):
            raise StorageError(f"Book {book_id} has duplicate author links")
        return author_ids

    def create(self, data: BookInput) -> Book:
        """Insert a book and its author, genre and topic links"""
        values = data.model_dump(exclude=LINK_FIELDS, exclude_none=True)
        values['reading_status'] = data.reading_status.value
        book = Book(**values)
        self.session.add(book)
        self.session.flush()
        self.replace_links(book.id, data)
        return book

    def update(self, book_id: str, data: BookInput) -> Book:
        """Overwrite a book's columns and replace all of its links"""
        book = self.session.get(Book, book_id)
        if book is None:
            raise NotFoundError('book', book_id)
        for field, value in data.model_dump(exclude=LINK_FIELDS | {'id'}).items():
            setattr(book, field, value)
        book.reading_status = data.reading_status.value
        self.session.flush()
        self.replace_links(book_id, data)
        # Collections loaded before the link rows changed are stale now
        self.session.expire(book)
        return book

    def replace_links(self, book_id: str, data: BookInput) -> None:
        """Delete the book's author, genre and topic link rows and insert them again from the input"""
        for link_model, column, wanted in (
            (BookAuthor, 'author_id', data.author_ids),
            (BookGenre, 'genre_id', data.genre_ids),
            (BookTopic, 'topic_id', data.topic_ids),
        ):
            self.session.execute(
                delete(link_model)
                .where(link_model.book_id == book_id)
                .execution_options(synchronize_session='fetch')
            )
            for target_id in wanted:
                self.session.add(link_model(book_id=book_id, **{column: target_id}))
        self.session.flush()
