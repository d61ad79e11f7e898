from .auth import Identity, IssuedToken, LoginRequest, LoginResponse
from .directory import DirectoryCreate, DirectoryUpdate, DirectoryRecord
from .task import TaskCreate, TaskUpdate, TaskRecord, TaskDetail
from .user import UserCreate, UserUpdate, UserRecord, UserPublic, UserCreated

__all__ = [
    'Identity', 'IssuedToken', 'LoginRequest', 'LoginResponse',
    'DirectoryCreate', 'DirectoryUpdate', 'DirectoryRecord',
    'TaskCreate', 'TaskUpdate', 'TaskRecord', 'TaskDetail',
    'UserCreate', 'UserUpdate', 'UserRecord', 'UserPublic', 'UserCreated',
]
