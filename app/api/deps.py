# app/api/deps.py
from fastapi import Depends, Header, HTTPException
from app.db.mongo import get_db
from app.db.redis import get_redis
from app.domain.repositories.order_repo import OrderRepo
from app.domain.repositories.product_repo import ProductRepo
from app.domain.repositories.user_repo import UserRepo

# Dependency for injecting the MongoDB database into repositories
async def mongo_db(db = Depends(get_db)):
    return db

# Dependency for injecting the Redis client (None when not configured)
def redis_dep():
    return get_redis()

def product_repo(db = Depends(mongo_db)) -> ProductRepo:
    return ProductRepo(db)

def order_repo(db = Depends(mongo_db)) -> OrderRepo:
    return OrderRepo(db)

def user_repo(db = Depends(mongo_db)) -> UserRepo:
    return UserRepo(db)

async def current_user_id(
    x_user_id: str | None = Header(default=None),
) -> str:
    """
    Identity of the caller, set by the authentication gateway in front of the service.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Authentication required (missing X-User-Id header).")
    return x_user_id.strip()
