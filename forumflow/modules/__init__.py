"""
Modules package initialization.
This package contains all the functional modules of the application.
"""

from forumflow.modules import auth
from forumflow.modules import user_management
from forumflow.modules import posts
from forumflow.modules import tags
from forumflow.modules import announcements
from forumflow.modules import reports
from forumflow.modules import dashboard
