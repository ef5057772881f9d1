from typing import List

from pydantic import BaseModel


class LikedIds(BaseModel):
    liked_ids: List[int]


class LikeToggleResult(BaseModel):
    product_id: int
    liked: bool
