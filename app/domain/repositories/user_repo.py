# app/domain/repositories/user_repo.py

from __future__ import annotations
import logging
from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from app.domain.models.user import CartLine, Shopper

logger = logging.getLogger(__name__)


class UserRepo:
    """Read-only access to the wishlist and cart stored on 'users' documents."""

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "users"):
        self.col = db[collection_name]

    async def get_by_user_id(self, user_id: str) -> Optional[Shopper]:
        doc = await self.col.find_one(
            {"user_id": user_id},
            {"_id": 0, "user_id": 1, "wishlist": 1, "cart": 1},
        )
        if not doc:
            return None

        cart: List[CartLine] = []
        for raw in doc.get("cart") or []:
            try:
                cart.append(CartLine.model_validate(raw))
            except ValidationError:
                logger.warning("skipping malformed cart line user_id=%s line=%s", user_id, raw)
        wishlist = [pid for pid in doc.get("wishlist") or [] if isinstance(pid, str)]
        return Shopper(user_id=user_id, wishlist=wishlist, cart=cart)
