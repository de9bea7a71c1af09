"""
Módulo de configuração do postindex.

Este módulo define a classe `Config`, que centraliza e valida as constantes
usadas pelo pipeline: URL da base dos Correios da Rússia, nomes dos arquivos
gerados, lista de colunas do DBF e parâmetros de codificação.
"""

from typing import Any, Dict

from .exceptions import ConfigurationError


class Config:
    """Gerenciador de configurações do postindex."""

    # --- Seção de Constantes Padrão ---
    # Usado como fallback se não for fornecida uma configuração customizada.
    DEFAULT_CONSTANTS = {
        # --- Constantes do Downloader ---
        "BASE_URL": "http://vinfo.russianpost.ru/database/",
        "ARCHIVE_FILENAME": "PIndx.zip",
        "CHUNK_SIZE": 1024,
        "TIMEOUT": None,
        "SHOW_PROGRESS": False,

        # --- Constantes do diretório de dados ---
        "DBF_FILENAME": "post-index.dbf",
        "CSV_FILENAME": "post-index.csv",
        "DIR_MODE": 0o700,

        # --- Constantes do Converter ---
        # A ordem das colunas é mantida no CSV.
        #   index     Índice postal do ponto de atendimento
        #   opsname   Nome do ponto de atendimento
        #   opstype   Tipo do ponto de atendimento
        #   opssubm   Índice do ponto ao qual este é subordinado
        #   region    Região (oblast, krai, república)
        #   autonom   Região autônoma
        #   area      Distrito
        #   city      Localidade
        #   city_1    Localidade subordinada
        #   actdate   Data de atualização do registro
        #   indexold  Índice anterior ao sistema de indexação vigente
        "COLUMNS": [
            "index", "opsname", "opstype", "opssubm", "region", "autonom",
            "area", "city", "city_1", "actdate", "indexold",
        ],
        "DATE_COLUMN": "actdate",
        "DATE_FORMAT": "%d.%m.%Y",
        "CSV_DELIMITER": ";",
        "DBF_ENCODING": "cp866",
        "OUTPUT_ENCODING": "utf-8",
        "LEGACY_ENCODING": "cp1251",
        "LEGACY_ENCODING_ERRORS": "replace",
    }

    def __init__(self, custom_constants: Dict[str, Any] = None):
        """
        Inicializa e valida as configurações do postindex.

        Args:
            custom_constants: Dicionário opcional para sobrescrever as constantes padrão.
        """
        constants = self.DEFAULT_CONSTANTS.copy()
        if custom_constants:
            unknown = set(custom_constants) - set(constants)
            if unknown:
                raise ConfigurationError(f"Constantes desconhecidas: {unknown}")
            constants.update(custom_constants)

        for key, value in constants.items():
            setattr(self, key, value)

        self._validate()

    def _validate(self):
        if not self.BASE_URL:
            raise ConfigurationError("BASE_URL não pode ser vazia")
        if not self.COLUMNS:
            raise ConfigurationError("A lista de colunas não pode ser vazia")
        if self.DATE_COLUMN not in self.COLUMNS:
            raise ConfigurationError(
                f"Coluna de data '{self.DATE_COLUMN}' ausente em COLUMNS"
            )
        if not isinstance(self.CHUNK_SIZE, int) or self.CHUNK_SIZE <= 0:
            raise ConfigurationError(f"CHUNK_SIZE inválido: {self.CHUNK_SIZE}")
        self.validate_delimiter(self.CSV_DELIMITER)

    @staticmethod
    def validate_delimiter(delimiter: str) -> str:
        if not isinstance(delimiter, str) or len(delimiter) != 1:
            raise ConfigurationError(
                f"Delimitador inválido: {delimiter!r}. Use um único caractere"
            )
        return delimiter

    @property
    def archive_url(self) -> str:
        return f"{self.BASE_URL}{self.ARCHIVE_FILENAME}"
