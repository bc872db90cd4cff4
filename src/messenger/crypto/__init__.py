from .hashes import md5_hex

__all__ = ["md5_hex"]
