"""Exceptions raised while converting blocks to markdown."""


class ConversionError(Exception):
    """Base exception for block conversion errors."""
    pass


class UnsupportedImageSourceError(ConversionError):
    """Image block carries neither a hosted file URL nor an external URL."""

    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(f"Image block {block_id} has neither a file nor an external URL")
