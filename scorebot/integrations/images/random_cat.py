import logging
import aiohttp
from .base import ImageSource

log = logging.getLogger(__name__)

class RandomCatImages(ImageSource):
    """random.cat style API: GET <url> -> {"file": "<image url>"}."""

    def __init__(self, api_url: str, timeout: float = 10.0):
        self.api_url = api_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def random_image_url(self) -> str:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(self.api_url) as resp:
                resp.raise_for_status()
                payload = await resp.json(content_type=None)
        url = str(payload["file"]).replace("\\", "")
        log.debug("Random image: %s", url)
        return url
