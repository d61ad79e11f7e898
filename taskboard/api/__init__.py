"""HTTP routes of the Taskboard API"""

from . import auth, directories, tasks, users

ROUTERS = [users.router, auth.router, directories.router, tasks.router]

__all__ = ['ROUTERS']
