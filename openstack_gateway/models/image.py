from typing import List, Optional

from pydantic import BaseModel


class Image(BaseModel):
    name: Optional[str] = None
    size: Optional[int] = None
    status: str
    checksum: Optional[str] = None
    protected: bool
    min_ram: int
    min_disk: int
    disk_format: Optional[str] = None


class ImagesResponse(BaseModel):
    images: List[Image]
