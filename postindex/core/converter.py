# postindex/core/converter.py

"""
converter.py: Conversão da tabela DBF para CSV.

Lê os registros da tabela dos Correios (codificação `cp866`) um a um, na
ordem do arquivo, e grava cada um como uma linha de texto delimitado. A
primeira linha é o cabeçalho com os nomes das colunas.

- A coluna de data (`actdate`) é formatada como `DD.MM.AAAA`.
- As demais colunas são gravadas como texto. Com `use_legacy_encoding`, o
  arquivo de saída é gravado em `cp1251`; caso contrário, em UTF-8.
"""

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Union

from dbfread import DBF

from ..config import Config

logger = logging.getLogger(__name__)


def format_value(column: str, value: Any, config: Config) -> str:
    if value is None:
        return ""
    if column == config.DATE_COLUMN:
        if isinstance(value, date):
            return value.strftime(config.DATE_FORMAT)
        # Data vazia ou não interpretada pelo dbfread
        return str(value).strip()
    if isinstance(value, str):
        return value
    return str(value)


def build_row(record: Dict[str, Any], config: Config) -> List[str]:
    return [format_value(column, record.get(column), config) for column in config.COLUMNS]


def convert_dbf_to_csv(
    dbf_path: Union[str, Path],
    csv_path: Union[str, Path],
    config: Config,
    delimiter: str = None,
    use_legacy_encoding: bool = False,
) -> int:
    """
    Converte a tabela DBF em CSV e retorna o número de registros gravados.

    Args:
        dbf_path: Caminho da tabela extraída.
        csv_path: Caminho do CSV a ser criado (sobrescrito se existir).
        config: Configuração com colunas, codificações e formato de data.
        delimiter: Separador de campos; usa `CSV_DELIMITER` se omitido.
        use_legacy_encoding: Grava o texto em `LEGACY_ENCODING` (cp1251).
    """
    delimiter = config.validate_delimiter(delimiter or config.CSV_DELIMITER)
    if use_legacy_encoding:
        encoding = config.LEGACY_ENCODING
        errors = config.LEGACY_ENCODING_ERRORS
    else:
        encoding = config.OUTPUT_ENCODING
        errors = "strict"

    logger.info(f"Convertendo '{Path(dbf_path).name}' para CSV (codificação: {encoding}).")
    table = DBF(str(dbf_path), encoding=config.DBF_ENCODING, lowernames=True)

    count = 0
    with open(csv_path, "w", encoding=encoding, errors=errors, newline="") as fh:
        writer = csv.writer(
            fh, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n"
        )
        writer.writerow(config.COLUMNS)
        for record in table:
            writer.writerow(build_row(record, config))
            count += 1

    logger.info(f"CSV gerado em {csv_path} com {count} registros.")
    return count
