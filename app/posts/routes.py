from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import sessionmaker

from app.db.session import get_session_factory
from app.posts.schemas import (
    MessageEnvelope, PostCreate, PostEnvelope, PostListEnvelope, PostResponse, PostUpdate
)
from app.posts.service import PostService, get_post_service, increment_views_detached

router = APIRouter()


@router.get("", response_model=PostListEnvelope)
def list_posts(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    post_service: PostService = Depends(get_post_service)
):
    """Lista de posts paginada (más recientes primero)"""
    result = post_service.list_posts(page=page, limit=limit)
    return PostListEnvelope(posts=result.posts, pagination=result.pagination)


@router.get("/{post_id}", response_model=PostEnvelope)
def get_post(
    post_id: int,
    background_tasks: BackgroundTasks,
    post_service: PostService = Depends(get_post_service),
    session_factory: sessionmaker = Depends(get_session_factory)
):
    """Detalle de un post; cada consulta suma una vista"""
    post = post_service.get_post(post_id)

    # Se ejecuta después de enviar la respuesta, con su propia sesión
    background_tasks.add_task(increment_views_detached, session_factory, post.id)

    return PostEnvelope(post=PostResponse.model_validate(post))


@router.post("", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    post_service: PostService = Depends(get_post_service)
):
    """Crear nuevo post"""
    post = post_service.create_post(**post_data.model_dump())
    return PostEnvelope(post=PostResponse.model_validate(post))


@router.put("/{post_id}", response_model=PostEnvelope)
def update_post(
    post_id: int,
    post_data: PostUpdate,
    post_service: PostService = Depends(get_post_service)
):
    """Actualizar post (se reemplazan todos los campos editables)"""
    post = post_service.update_post(post_id, **post_data.model_dump())
    return PostEnvelope(post=PostResponse.model_validate(post))


@router.delete("/{post_id}", response_model=MessageEnvelope)
def delete_post(
    post_id: int,
    post_service: PostService = Depends(get_post_service)
):
    """Eliminar post"""
    post_service.delete_post(post_id)
    return MessageEnvelope(message="Post deleted successfully")
