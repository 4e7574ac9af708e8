from typing import Protocol

class ImageSource(Protocol):
    async def random_image_url(self) -> str:
        """Return a publicly reachable image URL."""
        ...
