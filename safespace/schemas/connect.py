# safespace/schemas/connect.py
from datetime import datetime

from safespace.schemas.common import RowModel


class ConnectPostRow(RowModel):
    id: str
    user_id: str
    content: str
    topic: str
    is_professional: bool = False
    likes_count: int = 0
    created_at: datetime


class PostCommentRow(RowModel):
    id: str
    post_id: str
    user_id: str
    content: str
    is_professional: bool = False
    created_at: datetime


class PostLikeRow(RowModel):
    id: str
    post_id: str
    user_id: str
    created_at: datetime
