"""Rewrites image blocks to stable proxy URLs.

Files uploaded to Notion are served from signed URLs that expire after about
an hour. The image proxy serves the same asset under a URL that stays valid,
addressed by the original URL and the owning block's ID.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from .errors import UnsupportedImageSourceError

DEFAULT_PROXY_URL = 'https://www.notion.so/image/'

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a string the way JavaScript's encodeURIComponent does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def resolve_image_url(block: Dict[str, Any]) -> str:
    """
    Return the original source URL of an image block.

    Raises:
        UnsupportedImageSourceError: If neither the hosted nor the external URL is present
    """
    image = block.get('image') or {}

    if image.get('type') == 'file':
        url = (image.get('file') or {}).get('url')
    else:
        url = (image.get('external') or {}).get('url')

    if not url:
        raise UnsupportedImageSourceError(block.get('id', '<unknown>'))
    return url


class ImageProxyTransformer:
    """Custom transformer for ``image`` blocks producing proxy-URL image references."""

    def __init__(self, proxy_base_url: str = DEFAULT_PROXY_URL, logger: Optional[logging.Logger] = None):
        self.proxy_base_url = proxy_base_url if proxy_base_url.endswith('/') else proxy_base_url + '/'
        self.logger = logger or logging.getLogger('notion_jekyll_exporter.converters.images')

    def build_proxy_url(self, image_url: str, block_id: str) -> str:
        return f"{self.proxy_base_url}{encode_uri_component(image_url)}?table=block&id={block_id}&cache=v2"

    def __call__(self, block: Dict[str, Any]) -> str:
        image_url = resolve_image_url(block)
        proxy_url = self.build_proxy_url(image_url, block['id'])
        self.logger.debug(f"Rewrote image in block {block['id']} to proxy URL")
        return f"![image]({proxy_url})"


__all__ = [
    'DEFAULT_PROXY_URL',
    'ImageProxyTransformer',
    'encode_uri_component',
    'resolve_image_url'
]
