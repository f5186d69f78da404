"""AES-256, AES counter mode and ChaCha20 primitives in pure Python."""

__version__ = "0.1.0"
__all__ = ["byteops", "aes", "aes_ctr", "chacha", "chacha_lanes"]