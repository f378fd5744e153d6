"""
Post service: CRUD for the Post aggregate.

A post belongs to exactly one user.  The owner must exist when the post is
created and when posts are listed by owner; both checks raise ``NotFound``
instead of returning an empty result.  Every other miss (lookup, update,
delete by post id) is reported as None / False.

The owner is fixed at creation time: ``update_post`` only ever rewrites the
title and content.
"""
import logging

from postboard.exceptions import NotFound, require_id, translate_persistence_errors
from postboard.models import Post
from postboard.repositories import PostRepository, UserRepository
from postboard.schemas import PostRequest, PostResponse

logger = logging.getLogger(__name__)


def _to_response(post: Post) -> PostResponse:
    return PostResponse.model_validate(post)


class PostService:
    def __init__(self, posts: PostRepository, users: UserRepository) -> None:
        self.posts = posts
        self.users = users

    @translate_persistence_errors("create post")
    async def create_post(self, user_id: int | None, data: PostRequest) -> PostResponse:
        """
        Persist a new post owned by *user_id*.

        Raises NotFound when no such user exists; nothing is written then.
        """
        require_id(user_id, "User")
        logger.info("Creating post for user ID: %s with title: %s", user_id, data.title)

        user = await self.users.find_by_id(user_id)
        if user is None:
            logger.error("Cannot create post, user not found with ID: %s", user_id)
            raise NotFound(f"User not found with ID: {user_id}")

        post = await self.posts.save(
            Post(title=data.title, content=data.content, user_id=user.id)
        )
        logger.info("Post created successfully with ID: %s for user ID: %s", post.id, user_id)
        return _to_response(post)

    @translate_persistence_errors("fetch posts")
    async def get_posts(self) -> list[PostResponse]:
        logger.info("Fetching all posts")
        return [_to_response(p) for p in await self.posts.find_all()]

    @translate_persistence_errors("fetch post")
    async def get_post(self, post_id: int | None) -> PostResponse | None:
        require_id(post_id, "Post")
        logger.info("Fetching post with ID: %s", post_id)
        post = await self.posts.find_by_id(post_id)
        return _to_response(post) if post is not None else None

    @translate_persistence_errors("fetch posts")
    async def get_posts_by_user(self, user_id: int | None) -> list[PostResponse]:
        """
        Return all posts owned by *user_id*.

        Raises NotFound when the user does not exist, so an unknown user is
        distinguishable from a user without posts.
        """
        require_id(user_id, "User")
        logger.info("Fetching posts for user ID: %s", user_id)
        if not await self.users.exists_by_id(user_id):
            logger.error("Cannot list posts, user not found with ID: %s", user_id)
            raise NotFound(f"User not found with ID: {user_id}")

        return [_to_response(p) for p in await self.posts.find_all_by_user(user_id)]

    @translate_persistence_errors("update post")
    async def update_post(self, post_id: int | None, data: PostRequest) -> PostResponse | None:
        require_id(post_id, "Post")
        logger.info("Updating post with ID: %s", post_id)

        post = await self.posts.find_by_id(post_id)
        if post is None:
            logger.warning("Post with ID %s not found for update", post_id)
            return None

        post.title = data.title
        post.content = data.content
        post = await self.posts.save(post)
        logger.info("Post updated successfully with ID: %s", post.id)
        return _to_response(post)

    @translate_persistence_errors("delete post")
    async def delete_post(self, post_id: int | None) -> bool:
        require_id(post_id, "Post")
        logger.info("Deleting post with ID: %s", post_id)

        if not await self.posts.exists_by_id(post_id):
            logger.warning("Post with ID %s not found for deletion", post_id)
            return False

        await self.posts.delete_by_id(post_id)
        logger.info("Post deleted successfully with ID: %s", post_id)
        return True
