"""Category and focused-post endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.concepts.restrictions import ADMIN
from callboard.logging_config import get_logger
from callboard.responses import row_to_dict
from callboard.routes.deps import require_role, responses
from callboard.schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    PostCreateRequest,
    PostResponse,
    PostUpdate,
)
from callboard.services import post_service

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["posts"])


# ===========================================
# CATEGORIES
# ===========================================


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(concepts: Concepts = Depends(get_concepts)):
    return [row_to_dict(c) for c in await concepts.posts.get_all_categories()]


@router.get("/categories/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return row_to_dict(await concepts.posts.get_category(category_id))


@router.post("/categories", status_code=201)
async def create_category(
    body: CategoryCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    category = await concepts.posts.create_category(body.name, body.description)
    await concepts.session.commit()
    return {"msg": "Category created!", "category": row_to_dict(category)}


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Admins only. Every post filed under the category goes with it."""
    await require_role(concepts, user, ADMIN)
    posts = await post_service.delete_category(concepts, category_id)
    await concepts.session.commit()
    return {"msg": "Category deleted!", "posts": posts}


# ===========================================
# POSTS
# ===========================================


@router.get("/posts", response_model=list[PostResponse])
async def list_posts(
    author: UUID | None = None,
    category: UUID | None = None,
    concepts: Concepts = Depends(get_concepts),
):
    posts = await concepts.posts.get_posts(author=author, category=category)
    return await responses(concepts).posts(posts)


@router.post("/posts", status_code=201)
async def create_post(
    body: PostCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    post = await post_service.create_post(concepts, user, body.content, body.media, body.category)
    await concepts.session.commit()
    return {"msg": "Post created!", "post": await responses(concepts).post(post)}


@router.patch("/posts/{post_id}")
async def update_post(
    post_id: UUID,
    body: PostUpdate,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    post = await concepts.posts.update(post_id, body, user)
    await concepts.session.commit()
    return {"msg": "Post updated!", "post": await responses(concepts).post(post)}


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await post_service.delete_post(concepts, post_id, user)
    await concepts.session.commit()
    return {"msg": "Post deleted!", "post": post_id}
