from typing import Literal
from pydantic import BaseModel

VoteType = Literal["upvote", "downvote"]


class VoteCreate(BaseModel):
    type: VoteType
