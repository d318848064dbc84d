"""Sweet Memories backend: memories, guestbook and Cloudinary uploads."""

__version__ = "0.1.0"
