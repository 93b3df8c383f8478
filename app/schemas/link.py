from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class LinkCreate(BaseModel):
    """Arguments de postLink"""
    url: str
    description: str

class FeedArgs(BaseModel):
    """Arguments de pagination/filtre du feed"""
    filter_needle: Optional[str] = None
    skip: Optional[int] = None
    take: Optional[int] = None

class LinkFilter(BaseModel):
    """Filtre insensible à la casse sur description OU url"""
    needle: Optional[str] = None

    def matches(self, url: str, description: str) -> bool:
        if not self.needle:
            return True
        needle = self.needle.lower()
        return needle in description.lower() or needle in url.lower()

class LinkResponse(BaseModel):
    """Lien retourné"""
    id: int
    url: str
    description: str
    posted_by_id: Optional[int] = None
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)

class NewLinkEvent(BaseModel):
    """Event publié sur le topic newLink"""
    new_link: LinkResponse
