"""
Import file schemas.
"""

from pydantic import BaseModel, Field
from typing import List


class ImportResult(BaseModel):
    imported: int = 0
    duplicates: int = 0
    errors: List[str] = Field(default_factory=list)
