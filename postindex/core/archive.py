# postindex/core/archive.py

"""
archive.py: Descompactação da base baixada.

O arquivo `PIndx.zip` publicado pelos Correios contém uma única tabela DBF.
A função `unzip_table` extrai o conteúdo no diretório de dados, remove o
`.zip` e renomeia a primeira entrada listada para o nome canônico da tabela.

Nenhuma validação do nome da entrada é feita: se o arquivo publicado passar a
conter mais de uma entrada, a primeira da listagem continua sendo a escolhida
e um aviso é registrado no log.
"""

import logging
import os
import zipfile
from pathlib import Path
from typing import Union

from ..exceptions import UnzipError

logger = logging.getLogger(__name__)


def unzip_table(
    archive_path: Union[str, Path],
    target_dir: Union[str, Path],
    table_path: Union[str, Path],
) -> Path:
    archive_path = Path(archive_path)
    target_dir = Path(target_dir)
    table_path = Path(table_path)
    logger.info(f"Descompactando '{archive_path.name}' para: {target_dir}")

    try:
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            names = zip_ref.namelist()
            if not names:
                raise UnzipError(f"O arquivo '{archive_path.name}' está vazio.")
            if len(names) > 1:
                logger.warning(
                    f"'{archive_path.name}' contém {len(names)} entradas; "
                    f"usando a primeira: {names[0]}"
                )
            zip_ref.extractall(target_dir)
            entry_name = names[0]
    except (zipfile.BadZipFile, OSError) as e:
        logger.error(f"Falha ao abrir '{archive_path}': {e}", exc_info=True)
        raise UnzipError(
            f"O arquivo '{archive_path.name}' não é um zip válido ou está corrompido."
        ) from e

    os.remove(archive_path)
    os.replace(target_dir / entry_name, table_path)
    logger.info(f"Tabela extraída para: {table_path}")
    return table_path
