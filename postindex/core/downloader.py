# postindex/core/downloader.py

"""
downloader.py: Módulo de Comunicação HTTP do postindex.

Este módulo concentra todo o acesso ao servidor dos Correios da Rússia.

**Classe `Downloader`:**

- **Inicialização:** Recebe um objeto `Config` com a URL base, o nome do
  arquivo `.zip`, o tamanho dos blocos de download e o timeout. Uma
  `requests.Session` pode ser injetada (útil nos testes); caso contrário,
  uma nova sessão é criada.

- **Verificação de versão:** `fetch_last_modified` faz uma requisição `HEAD`
  na página da base e interpreta o cabeçalho `Last-Modified`, retornando um
  `datetime` com fuso horário. Se o cabeçalho vier repetido, vale o último
  valor. A ausência do cabeçalho, ou uma falha de rede, resulta em
  `ConnectionFailedError`.

- **Download:** `download` baixa o arquivo `.zip` em modo streaming, gravando
  blocos de `CHUNK_SIZE` bytes no destino. Erros de transporte do `requests`
  são propagados sem tradução.
"""

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Optional, Union

import requests
from tqdm import tqdm

from ..config import Config
from ..exceptions import ConnectionFailedError

LAST_MODIFIED_HEADER = "Last-Modified"


def parse_http_date(value) -> Optional[datetime]:
    """
    Interpreta o valor de um cabeçalho de data HTTP.

    Aceita uma lista de valores ou um valor único em que várias datas foram
    concatenadas por vírgula; em ambos os casos vale a última data. Retorna
    `None` se nada puder ser interpretado.
    """
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    if not value:
        return None

    # "Tue, 15 Nov 1994 08:12:31 GMT, Wed, 16 Nov 1994 10:00:00 GMT"
    # O dia da semana é opcional, então o último trecho já é uma data completa.
    for candidate in reversed(value.split(",")):
        candidate = candidate.strip()
        if not candidate:
            continue
        try:
            parsed = parsedate_to_datetime(candidate)
        except (TypeError, ValueError, IndexError):
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


class Downloader:
    """
    Classe responsável pela verificação de versão e pelo download da base.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.logger = logging.getLogger(__name__)
        self._session = session if session is not None else requests.Session()
        self.logger.debug("Downloader inicializado.")

    def fetch_last_modified(self) -> datetime:
        """
        Obtém a data de modificação da base publicada no site.
        """
        url = self.config.BASE_URL
        self.logger.info(f"Consultando data de modificação em: {url}")
        try:
            response = self._session.head(url, timeout=self.config.TIMEOUT)
        except requests.RequestException as e:
            self.logger.error(f"Falha ao consultar {url}: {e}", exc_info=True)
            raise ConnectionFailedError(f"Sem conexão com {url}: {e}") from e

        raw_value = response.headers.get(LAST_MODIFIED_HEADER)
        if not raw_value:
            self.logger.error(f"Resposta de {url} sem cabeçalho {LAST_MODIFIED_HEADER}.")
            raise ConnectionFailedError(
                f"Cabeçalho {LAST_MODIFIED_HEADER} ausente na resposta de {url}"
            )

        last_modified = parse_http_date(raw_value)
        if last_modified is None:
            self.logger.error(f"Valor de {LAST_MODIFIED_HEADER} inválido: {raw_value!r}")
            raise ConnectionFailedError(
                f"Não foi possível interpretar {LAST_MODIFIED_HEADER}: {raw_value!r}"
            )

        self.logger.info(f"Base publicada no site em: {last_modified.isoformat()}")
        return last_modified

    def download(self, destination: Union[str, Path]) -> Path:
        """
        Baixa o arquivo `.zip` da base para `destination`, sobrescrevendo-o.
        """
        url = self.config.archive_url
        destination = Path(destination)
        self.logger.info(f"Realizando download de: {url}")

        with self._session.get(url, stream=True, timeout=self.config.TIMEOUT) as response:
            response.raise_for_status()
            total = int(response.headers.get("Content-Length") or 0) or None
            written = 0
            with open(destination, "wb") as fh, tqdm(
                total=total,
                desc="Baixando base",
                unit="B",
                unit_scale=True,
                disable=not self.config.SHOW_PROGRESS,
            ) as pbar:
                for chunk in response.iter_content(chunk_size=self.config.CHUNK_SIZE):
                    if not chunk:
                        continue
                    fh.write(chunk)
                    written += len(chunk)
                    pbar.update(len(chunk))

        self.logger.info(f"Download concluído: {destination} ({written} bytes).")
        return destination

    def close(self):
        self.logger.debug("Fechando sessão HTTP do Downloader.")
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
