from .serializer import deserialize, serialize
from .virtual_fs import VirtualFileSystem

__all__ = ["VirtualFileSystem", "deserialize", "serialize"]
