from pydantic import BaseModel, ConfigDict
from datetime import datetime

class CommentCreate(BaseModel):
    # link_id reste brut : il est parsé par le service
    link_id: str
    body: str

class CommentResponse(BaseModel):
    id: int
    body: str
    link_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
