"""Practice folder and repertoire folder endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends

from callboard.auth import get_current_user_id
from callboard.concepts import Concepts, get_concepts
from callboard.concepts.restrictions import ACTOR, ADMIN
from callboard.routes.deps import require_role, responses
from callboard.schemas import (
    FolderItemRequest,
    FolderSettingsRequest,
    FolderSettingsResponse,
    RepertoireCreateRequest,
)

router = APIRouter(prefix="/api", tags=["folders"])


# ===========================================
# PRACTICE FOLDER
# ===========================================


@router.get("/practice-folder")
async def get_practice_folder(
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    return await responses(concepts).folder(await concepts.folders.get_practice(user))


@router.patch("/practice-folder/add")
async def add_to_practice(
    body: FolderItemRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    folder = await concepts.folders.add_practice(user, body.item)
    await concepts.session.commit()
    return {"msg": "Added to practice folder!", "folder": await responses(concepts).folder(folder)}


@router.patch("/practice-folder/remove")
async def remove_from_practice(
    body: FolderItemRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    folder = await concepts.folders.remove_practice(user, body.item)
    await concepts.session.commit()
    return {
        "msg": "Removed from practice folder!",
        "folder": await responses(concepts).folder(folder),
    }


@router.get("/practice-folder/settings", response_model=FolderSettingsResponse)
async def get_practice_settings(concepts: Concepts = Depends(get_concepts)):
    return FolderSettingsResponse(capacity=concepts.folders.capacity)


@router.patch("/practice-folder/settings", response_model=FolderSettingsResponse)
async def change_practice_settings(
    body: FolderSettingsRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    """Admins only. Applies to every practice folder from the next addition on."""
    await require_role(concepts, user, ADMIN)
    return FolderSettingsResponse(capacity=concepts.folders.change_capacity(body.capacity))


# ===========================================
# REPERTOIRE FOLDERS
# ===========================================


@router.get("/repertoire-folders/user/{user_id}")
async def user_repertoire(user_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).folders(await concepts.folders.get_user_repertoire(user_id))


@router.get("/repertoire-folders/{folder_id}")
async def get_repertoire(folder_id: UUID, concepts: Concepts = Depends(get_concepts)):
    return await responses(concepts).folder(await concepts.folders.get_repertoire(folder_id))


@router.post("/repertoire-folders", status_code=201)
async def create_repertoire(
    body: RepertoireCreateRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    await require_role(concepts, user, ACTOR)
    folder = await concepts.folders.create_repertoire(user, body.name)
    await concepts.session.commit()
    return {"msg": "Repertoire folder created!", "folder": await responses(concepts).folder(folder)}


@router.patch("/repertoire-folders/{folder_id}/add")
async def add_to_repertoire(
    folder_id: UUID,
    body: FolderItemRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    folder = await concepts.folders.add_repertoire(user, folder_id, body.item)
    await concepts.session.commit()
    return {"msg": "Added to repertoire!", "folder": await responses(concepts).folder(folder)}


@router.patch("/repertoire-folders/{folder_id}/remove")
async def remove_from_repertoire(
    folder_id: UUID,
    body: FolderItemRequest,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    folder = await concepts.folders.remove_repertoire(user, folder_id, body.item)
    await concepts.session.commit()
    return {"msg": "Removed from repertoire!", "folder": await responses(concepts).folder(folder)}


@router.delete("/repertoire-folders/{folder_id}")
async def delete_repertoire(
    folder_id: UUID,
    user: UUID = Depends(get_current_user_id),
    concepts: Concepts = Depends(get_concepts),
):
    contents = await concepts.folders.delete_repertoire(user, folder_id)
    await concepts.session.commit()
    return {"msg": "Repertoire folder deleted!", "contents": contents}
