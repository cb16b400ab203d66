from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class PostWrite(BaseModel):
    """Cuerpo de POST y PUT: siempre se envía el estado completo del post"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = ""
    thumbnail: Optional[str] = None

    @field_validator('title', 'content')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError('must not be blank')
        return v


class PostCreate(PostWrite):
    pass


class PostUpdate(PostWrite):
    pass


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    excerpt: str = ""
    thumbnail: Optional[str] = None
    view_count: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PostSummary(BaseModel):
    """Resumen de post para listados (sin content)"""
    id: int
    title: str
    excerpt: str = ""
    thumbnail: Optional[str] = None
    created_at: datetime
    view_count: int = 0

    class Config:
        from_attributes = True


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")

    class Config:
        populate_by_name = True


class PostsPage(BaseModel):
    posts: List[PostSummary]
    pagination: Pagination


# --- Envolturas de respuesta ---

class PostListEnvelope(PostsPage):
    success: bool = True


class PostEnvelope(BaseModel):
    success: bool = True
    post: PostResponse


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
