from enum import Enum
from pydantic import BaseModel
from typing import Dict, List


class ReactionKind(str, Enum):
    like = "like"
    love = "love"
    wow = "wow"


class ReactionToggleResult(BaseModel):
    kind: ReactionKind
    active: bool


class ReactionSummary(BaseModel):
    post_id: str
    counts: Dict[ReactionKind, int]
    reacted: List[ReactionKind] = []
