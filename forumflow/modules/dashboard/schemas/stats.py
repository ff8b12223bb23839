from pydantic import BaseModel


class DashboardStats(BaseModel):
    totalPosts: int
    publishedPosts: int
    draftPosts: int
