# Services package.
#
# Each module exposes one service class that holds the business rules for
# a single aggregate:
#
#   user_service   UserService, CRUD for User, email uniqueness
#   post_service   PostService, CRUD for Post, owner existence checks
#
# Services are built per request from repositories bound to the request's
# AsyncSession (see ``postboard.dependencies``), so the router layer owns
# the transaction boundary via the ``get_db`` dependency.
