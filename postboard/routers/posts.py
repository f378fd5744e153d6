from fastapi import APIRouter, Depends, HTTPException

from postboard.dependencies import get_post_service
from postboard.schemas import ErrorResponse, PostRequest, PostResponse
from postboard.services.post_service import PostService

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])

_USER_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User not found"}}

@router.post("/users/{user_id}", status_code=201, response_model=PostResponse, responses=_USER_NOT_FOUND)
async def create_post(user_id: int, data: PostRequest, service: PostService = Depends(get_post_service)):
    return await service.create_post(user_id, data)

@router.get("", response_model=list[PostResponse])
async def list_posts(service: PostService = Depends(get_post_service)):
    return await service.get_posts()

@router.get("/users/{user_id}", response_model=list[PostResponse], responses=_USER_NOT_FOUND)
async def list_posts_by_user(user_id: int, service: PostService = Depends(get_post_service)):
    return await service.get_posts_by_user(user_id)

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, service: PostService = Depends(get_post_service)):
    post = await service.get_post(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.put("/{post_id}", response_model=PostResponse)
async def update_post(post_id: int, data: PostRequest, service: PostService = Depends(get_post_service)):
    post = await service.update_post(post_id, data)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post

@router.delete("/{post_id}", status_code=204)
async def delete_post(post_id: int, service: PostService = Depends(get_post_service)):
    deleted = await service.delete_post(post_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Post not found")
