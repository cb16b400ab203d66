import logging
import math
from contextlib import contextmanager
from typing import Any, Optional

from fastapi import Depends
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import PostNotFoundError, PostValidationError, StoreError
from app.db.models import Post, utcnow
from app.db.session import get_db
from app.posts.schemas import Pagination, PostsPage, PostSummary

logger = logging.getLogger(__name__)

# Columnas del listado: content queda fuera para mantener la respuesta liviana
SUMMARY_COLUMNS = (
    Post.id,
    Post.title,
    Post.excerpt,
    Post.thumbnail,
    Post.created_at,
    Post.view_count,
)


def _positive_int(value: Any, default: int) -> int:
    """Convierte page/limit; valores ausentes, no numéricos o <= 0 usan el default"""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _require_text(title: Optional[str], content: Optional[str]) -> None:
    if not isinstance(title, str) or not title.strip():
        raise PostValidationError()
    if not isinstance(content, str) or not content.strip():
        raise PostValidationError()
    if len(title) > 255:
        raise PostValidationError("Title must be at most 255 characters")


class PostService:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store(self, action: str):
        """Traduce errores de SQLAlchemy a StoreError (sin reintentos)"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error al {action}: {e}")
            raise StoreError(str(e)) from e

    def list_posts(self, page: Any = 1, limit: Any = None) -> PostsPage:
        """Obtiene posts paginados, más recientes primero"""
        page = _positive_int(page, 1)
        limit = min(_positive_int(limit, settings.POSTS_PAGE_SIZE), settings.POSTS_MAX_PAGE_SIZE)
        offset = (page - 1) * limit

        with self._store("listar posts"):
            # count y página van en sentencias separadas; el total puede ser aproximado
            total = self.db.query(Post).count()
            # Una página fuera de rango no consulta: el offset podría exceder BIGINT
            rows = []
            if offset < total:
                rows = (
                    self.db.query(*SUMMARY_COLUMNS)
                    .order_by(desc(Post.created_at), desc(Post.id))
                    .offset(offset)
                    .limit(limit)
                    .all()
                )

        return PostsPage(
            posts=[PostSummary.model_validate(row) for row in rows],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    def get_post(self, post_id: int) -> Post:
        """Obtiene un post completo por ID"""
        with self._store(f"obtener post {post_id}"):
            # populate_existing: las vistas las escribe otra sesión
            post = (
                self.db.query(Post)
                .populate_existing()
                .filter(Post.id == post_id)
                .first()
            )
        if not post:
            raise PostNotFoundError()
        return post

    def create_post(
        self,
        title: Optional[str],
        content: Optional[str],
        excerpt: Optional[str] = None,
        thumbnail: Optional[str] = None,
    ) -> Post:
        """Crea un nuevo post"""
        _require_text(title, content)
        now = utcnow()
        post = Post(
            title=title,
            content=content,
            excerpt=excerpt or "",
            thumbnail=thumbnail,
            view_count=0,
            created_at=now,
            updated_at=now,
        )
        with self._store("crear post"):
            self.db.add(post)
            self.db.commit()
            self.db.refresh(post)
        logger.info(f"Post {post.id} creado")
        return post

    def update_post(
        self,
        post_id: int,
        title: Optional[str],
        content: Optional[str],
        excerpt: Optional[str] = None,
        thumbnail: Optional[str] = None,
    ) -> Post:
        """Reemplaza los campos editables del post (sin merge parcial)"""
        _require_text(title, content)
        with self._store(f"actualizar post {post_id}"):
            post = self.db.query(Post).filter(Post.id == post_id).first()
            if not post:
                raise PostNotFoundError()

            post.title = title
            post.content = content
            post.excerpt = excerpt or ""
            post.thumbnail = thumbnail
            post.updated_at = utcnow()

            self.db.commit()
            self.db.refresh(post)
        return post

    def delete_post(self, post_id: int) -> None:
        """Elimina un post de forma permanente"""
        with self._store(f"eliminar post {post_id}"):
            deleted = (
                self.db.query(Post)
                .filter(Post.id == post_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        if not deleted:
            raise PostNotFoundError()
        logger.info(f"Post {post_id} eliminado")

    def increment_views(self, post_id: int) -> bool:
        """Incrementa el contador de vistas con un único UPDATE atómico"""
        with self._store(f"incrementar vistas del post {post_id}"):
            updated = (
                self.db.query(Post)
                .filter(Post.id == post_id)
                .update(
                    {Post.view_count: Post.view_count + 1},
                    synchronize_session=False,
                )
            )
            self.db.commit()
        return updated > 0


def increment_views_detached(session_factory: sessionmaker, post_id: int) -> None:
    """Tarea en segundo plano: los fallos se registran y nunca llegan al cliente"""
    db = session_factory()
    try:
        PostService(db).increment_views(post_id)
    except Exception:
        logger.exception(f"No se pudo incrementar las vistas del post {post_id}")
    finally:
        db.close()


def get_post_service(db: Session = Depends(get_db)) -> PostService:
    """Factory function para obtener una instancia del servicio de posts"""
    return PostService(db)
