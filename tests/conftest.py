# Ajuste de ambiente e fixtures compartilhadas dos testes pytest
#
# Garante que a raiz do projeto esteja no sys.path para que o pacote
# 'postindex' seja encontrado, e fornece geradores de tabelas DBF e de
# arquivos zip parecidos com os publicados pelos Correios.

import io
import os
import struct
import sys
import zipfile
from datetime import date
from unittest.mock import MagicMock, Mock

import pytest

# Adiciona a raiz do projeto ao sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from postindex.config import Config  # noqa: E402

FIELD_SIZES = {
    "index": 6, "opsname": 60, "opstype": 50, "opssubm": 6, "region": 60,
    "autonom": 60, "area": 60, "city": 60, "city_1": 60, "actdate": 8,
    "indexold": 6,
}

SAMPLE_RECORDS = [
    {
        "index": "101000", "opsname": "Москва Почтамт", "opstype": "Почтамт",
        "opssubm": "104000", "region": "Москва", "autonom": "", "area": "",
        "city": "Москва", "city_1": "", "actdate": date(2016, 3, 9),
        "indexold": "",
    },
    {
        "index": "190000", "opsname": "Санкт-Петербург; отделение", "opstype": "ОПС",
        "opssubm": "190961", "region": "Санкт-Петербург", "autonom": "", "area": "",
        "city": "Санкт-Петербург", "city_1": "", "actdate": date(2015, 12, 1),
        "indexold": "190",
    },
    {
        "index": "630000", "opsname": "Новосибирск", "opstype": "ОПС",
        "opssubm": "630960", "region": "Новосибирская область", "autonom": "",
        "area": "", "city": "Новосибирск", "city_1": "", "actdate": None,
        "indexold": "",
    },
]


def write_dbf(path, records, encoding="cp866", columns=None):
    """Grava uma tabela dBase III mínima com as colunas da base dos Correios."""
    columns = columns or list(FIELD_SIZES)
    fields = [
        (name.upper(), "D" if name == "actdate" else "C", FIELD_SIZES[name])
        for name in columns
    ]
    record_len = 1 + sum(length for _, _, length in fields)
    header_len = 32 + 32 * len(fields) + 1
    today = date.today()

    with open(path, "wb") as fh:
        fh.write(struct.pack(
            "<BBBBLHH20x", 0x03, today.year - 1900, today.month, today.day,
            len(records), header_len, record_len,
        ))
        address = 1
        for name, ftype, length in fields:
            fh.write(struct.pack(
                "<11scLBB14x", name.encode("ascii"), ftype.encode("ascii"),
                address, length, 0,
            ))
            address += length
        fh.write(b"\r")
        for record in records:
            fh.write(b" ")
            for name, ftype, length in fields:
                value = record.get(name.lower())
                if ftype == "D":
                    raw = value.strftime("%Y%m%d").encode("ascii") if value else b" " * 8
                else:
                    raw = (value or "").encode(encoding)[:length].ljust(length, b" ")
                fh.write(raw)
        fh.write(b"\x1a")
    return path


def make_zip_bytes(files):
    """Cria um zip em memória. `files` é uma lista de (nome, bytes)."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files:
            zf.writestr(name, content)
    return buffer.getvalue()


def make_session(last_modified="Wed, 09 Mar 2016 10:00:00 GMT", body=b"", chunk_size=1024):
    """Sessão HTTP falsa: HEAD devolve o Last-Modified e GET devolve `body`."""
    session = Mock()

    head_response = Mock()
    head_response.headers = {"Last-Modified": last_modified} if last_modified else {}
    session.head.return_value = head_response

    get_response = MagicMock()
    get_response.headers = {"Content-Length": str(len(body))}
    get_response.raise_for_status = Mock()
    get_response.iter_content.side_effect = lambda chunk_size=chunk_size: (
        body[i:i + chunk_size] for i in range(0, len(body), chunk_size)
    )
    get_response.__enter__.return_value = get_response
    session.get.return_value = get_response
    return session


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def sample_dbf(tmp_path):
    return write_dbf(tmp_path / "source.dbf", SAMPLE_RECORDS)


@pytest.fixture
def sample_archive_bytes(sample_dbf):
    return make_zip_bytes([("PIndx16.dbf", sample_dbf.read_bytes())])


@pytest.fixture
def dbf_writer():
    return write_dbf


@pytest.fixture
def zip_factory():
    return make_zip_bytes


@pytest.fixture
def session_factory():
    return make_session


@pytest.fixture
def sample_records():
    return SAMPLE_RECORDS
