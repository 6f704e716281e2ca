from .encrypted import EncryptedStorage
from .file import FileStorage
from .memory import MemoryStorage
from .redis import RedisStorage

__all__ = ["EncryptedStorage", "FileStorage", "MemoryStorage", "RedisStorage"]
