"""
postindex: atualização da base de índices postais dos Correios da Rússia.

Este arquivo é o ponto de entrada do pacote `postindex`. Ele define a
interface pública da biblioteca, expondo o gerenciador da base, a
configuração e as exceções.
"""

__version__ = "0.1.0"

from postindex.config import Config
from postindex.core.downloader import Downloader
from postindex.exceptions import (ConfigurationError, ConnectionFailedError,
                                  DirectoryCreateError, PathConflictError,
                                  PostIndexError, UnzipError)
from postindex.manager import PostIndex, setup_logging

__all__ = [
    "PostIndex",
    "Config",
    "Downloader",
    "setup_logging",
    "PostIndexError",
    "ConfigurationError",
    "PathConflictError",
    "DirectoryCreateError",
    "ConnectionFailedError",
    "UnzipError",
]
