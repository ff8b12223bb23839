# Collection names used across the modules
# Comments are embedded in post documents and have no collection of their own

POSTS = "posts"
USERS = "users"
ANNOUNCEMENTS = "announcements"
REPORTS = "reports"

ALL_COLLECTIONS = (POSTS, USERS, ANNOUNCEMENTS, REPORTS)
