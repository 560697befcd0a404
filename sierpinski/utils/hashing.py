"""SHA-256 hashing for raster and file provenance.

Provides:
    - sha256_file(): Hash file contents (saved PNGs, configs)
    - sha256_array(): Hash pixel buffers (determinism checks)
    - sha256_string(): Hash short strings (config fingerprints)

Rendering is deterministic, so two renders with the same canvas, threshold
and colors must produce the same ``sha256_array`` digest. The render
manifest records it next to the image.

Usage:
    from sierpinski.utils import hashing
    digest = hashing.sha256_array(sink.to_array())

Note: Module named `hashing.py` to avoid shadowing builtin `hash()`.
"""

import hashlib
from pathlib import Path
from typing import Union

import numpy as np


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    chunk_size : int
        Read chunk size in bytes, default 1 MB

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256 = hashlib.sha256()

    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            sha256.update(chunk)

    return sha256.hexdigest()


def sha256_array(arr: np.ndarray) -> str:
    """Compute SHA-256 hash of array values.

    Parameters
    ----------
    arr : np.ndarray
        Array to hash (any shape, dtype)

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Notes
    -----
    Same values → same hash. Not invariant to dtype or shape: the shape is
    mixed into the digest so a 10×20 and a 20×10 canvas never collide.
    """
    sha256 = hashlib.sha256()
    sha256.update(str(arr.shape).encode('utf-8'))
    sha256.update(np.ascontiguousarray(arr).tobytes())
    return sha256.hexdigest()


def sha256_string(s: str) -> str:
    """Compute SHA-256 hash of string."""
    sha256 = hashlib.sha256()
    sha256.update(s.encode('utf-8'))
    return sha256.hexdigest()
