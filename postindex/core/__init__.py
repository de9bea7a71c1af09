"""
Pacote Core do postindex.

Este pacote contém os módulos que executam as etapas do pipeline:

- `downloader`: Verificação de versão e download da base.
- `archive`: Descompactação do arquivo baixado.
- `converter`: Conversão da tabela DBF para CSV.
"""
