# postindex/manager.py

"""
manager.py: Orquestrador da base de índices postais.

Este módulo contém a classe `PostIndex`, o ponto de entrada da biblioteca.
Ela é dona de um diretório de dados e executa, em sequência, as etapas do
pipeline:

1.  **Verificação de versão:** compara a data de modificação publicada no
    site (`Last-Modified`) com a data da versão local informada pelo
    chamador.
2.  **Download:** baixa o `PIndx.zip` para o diretório de dados.
3.  **Descompactação:** extrai a tabela DBF e a renomeia para
    `post-index.dbf`.
4.  **Conversão:** gera `post-index.csv` a partir da tabela.

A data da versão local não é persistida pela biblioteca; guardá-la entre
execuções é responsabilidade da aplicação.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import requests

from postindex.config import Config
from postindex.core.archive import unzip_table
from postindex.core.converter import convert_dbf_to_csv
from postindex.core.downloader import Downloader
from postindex.exceptions import DirectoryCreateError, PathConflictError

logger = logging.getLogger("postindex")


def setup_logging(debug_mode=False, log_file: Optional[Union[str, Path]] = None):
    level = logging.DEBUG if debug_mode else logging.INFO
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    detailed_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    stream_formatter_info = logging.Formatter("[%(levelname)s] %(message)s")
    if log_file:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, mode="a")
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(
        detailed_formatter if debug_mode else stream_formatter_info
    )
    stream_handler.setLevel(level)
    logger.addHandler(stream_handler)
    logger.setLevel(level)
    if not debug_mode:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def _as_aware(value: datetime) -> datetime:
    # Datas sem fuso são tratadas como UTC, o mesmo fuso do Last-Modified.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostIndex:
    """
    Gerenciador da base de índices postais dos Correios da Rússia.
    """

    def __init__(
        self,
        path_dir: Union[str, Path],
        last_modified: Optional[datetime] = None,
        config: Optional[Config] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            path_dir: Diretório onde os arquivos são salvos. Criado se não existir.
            last_modified: Data da versão local da base, se houver.
            config: Configuração; usa os valores padrão se omitida.
            session: Sessão HTTP opcional, usada pelo `Downloader`.
        """
        self.config = config or Config()
        self.last_modified = last_modified
        self.rows_written = 0
        self._last_modified_on_website: Optional[datetime] = None

        path_dir = os.fspath(path_dir)
        if os.path.isfile(path_dir):
            raise PathConflictError(f"{path_dir} não é um diretório")
        if not os.path.exists(path_dir):
            logger.debug(f"Criando diretório de dados: {path_dir}")
            try:
                os.makedirs(path_dir, mode=self.config.DIR_MODE)
            except OSError as e:
                logger.error(f"Falha ao criar {path_dir}: {e}", exc_info=True)
                raise DirectoryCreateError(f"{path_dir}: diretório não criado") from e

        if not path_dir.endswith(os.sep):
            path_dir += os.sep
        self.path_dir = path_dir
        self._downloader = Downloader(self.config, session=session)

    @property
    def path(self) -> Path:
        return Path(self.path_dir)

    @property
    def _archive_path(self) -> str:
        return self.path_dir + self.config.ARCHIVE_FILENAME

    @property
    def _dbf_path(self) -> str:
        return self.path_dir + self.config.DBF_FILENAME

    @property
    def _csv_path(self) -> str:
        return self.path_dir + self.config.CSV_FILENAME

    def filepath_csv(self):
        """Caminho do CSV gerado, ou `False` se ele não existir."""
        if os.path.exists(self._csv_path):
            return self._csv_path
        return False

    def filepath_dbf(self):
        """Caminho da tabela DBF extraída, ou `False` se ela não existir."""
        if os.path.exists(self._dbf_path):
            return self._dbf_path
        return False

    def has_new_version(self) -> bool:
        """
        Verifica se o site publica uma versão mais recente que a local.

        Sem data local, qualquer versão publicada é considerada nova.
        """
        self._last_modified_on_website = self._downloader.fetch_last_modified()
        if self.last_modified is None:
            return True
        return _as_aware(self.last_modified) < self._last_modified_on_website

    def last_modified_on_website(self) -> datetime:
        if self._last_modified_on_website is None:
            self.has_new_version()
        return self._last_modified_on_website

    def refresh(self, delimiter: str = None, use_legacy_encoding: bool = False) -> "PostIndex":
        """
        Baixa a base, extrai a tabela e gera o CSV.

        Args:
            delimiter: Separador de campos do CSV (padrão `;`).
            use_legacy_encoding: Grava o texto do CSV em cp1251.

        Returns:
            A própria instância, permitindo encadear chamadas.
        """
        logger.info("[ETAPA 1] Download da base.")
        self._downloader.download(self._archive_path)

        logger.info("[ETAPA 2] Descompactação.")
        unzip_table(self._archive_path, self.path_dir, self._dbf_path)

        logger.info("[ETAPA 3] Conversão para CSV.")
        self.rows_written = convert_dbf_to_csv(
            self._dbf_path,
            self._csv_path,
            self.config,
            delimiter=delimiter or self.config.CSV_DELIMITER,
            use_legacy_encoding=use_legacy_encoding,
        )
        return self

    def close(self):
        self._downloader.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
