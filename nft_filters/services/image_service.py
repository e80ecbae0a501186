from pathlib import Path
from typing import Iterable, Iterator, Union

from ..models.pixel_buffer import PixelBuffer
from ..repositories.image_repository import ImageRepository


class ImageService:
    """Codec and I/O helpers.  No filter logic."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def decode(self, data: bytes) -> PixelBuffer:
        """Turn encoded bytes (PNG, JPEG, ...) into an RGBA PixelBuffer."""
        return self.image_repository.decode(data)

    def encode(self, buffer: PixelBuffer) -> bytes:
        """Serialise a PixelBuffer to PNG bytes, whatever format it came from."""
        return self.image_repository.encode(buffer)

    def load(self, path: Union[str, Path]) -> PixelBuffer:
        """Load a single image from disk into a PixelBuffer."""
        return self.image_repository.load(path)

    def save_bytes(self, data: bytes, path: Union[str, Path]) -> Path:
        return self.image_repository.save_bytes(data, path)

    def stream_paths(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Path]:
        """
        Yield image paths lazily instead of returning a gigantic list.
        """
        return self.image_repository.iter_dir(folder, recursive=recursive, exts=exts)
