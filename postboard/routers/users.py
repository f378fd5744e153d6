from fastapi import APIRouter, Depends, HTTPException

from postboard.dependencies import get_user_service
from postboard.schemas import ErrorResponse, UserRequest, UserResponse
from postboard.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses={409: {"model": ErrorResponse, "description": "Email already in use"}},
)
async def create_user(data: UserRequest, service: UserService = Depends(get_user_service)):
    return await service.create_user(data)

@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.get_users()

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    user = await service.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={409: {"model": ErrorResponse, "description": "Email already in use"}},
)
async def update_user(user_id: int, data: UserRequest, service: UserService = Depends(get_user_service)):
    user = await service.update_user(user_id, data)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    deleted = await service.delete_user(user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
